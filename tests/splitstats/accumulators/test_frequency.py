from splitstats.accumulators import (
    FrequencyAccumulator,
    combine_frequencies,
    tabulate,
)


class TestTabulate:
    def test_counts(self):
        acc = tabulate(["a", "b", "a", "c"], na_count=2)
        assert acc.counts == {"a": 2, "b": 1, "c": 1}
        assert acc.na_count == 2
        assert acc.n_obs == 6
        assert acc.complete

    def test_first_appearance_order(self):
        acc = tabulate(["z", "a", "z", "m"])
        assert list(acc.counts.keys()) == ["z", "a", "m"]

    def test_cap(self):
        acc = tabulate(["a", "b", "c", "a", "c"], cap=2)
        assert acc.counts == {"a": 2, "b": 1}
        assert acc.n_obs == 5
        assert not acc.complete


class TestCombineFrequencies:
    def test_sums_shared_categories(self):
        a = tabulate(["a", "a", "b"], na_count=1)
        b = tabulate(["b", "c"], na_count=2)
        acc = combine_frequencies(a, b)

        assert acc.counts == {"a": 2, "b": 2, "c": 1}
        assert acc.na_count == 3
        assert acc.n_obs == 8
        assert acc.complete

    def test_identity(self):
        a = tabulate(["x", "y"], na_count=1)
        empty = FrequencyAccumulator()
        assert combine_frequencies(a, empty) == a
        assert combine_frequencies(empty, a) == a

    def test_cap_drops_new_categories(self):
        parts = [tabulate(["a", "a"], cap=2), tabulate(["b"], cap=2)]
        parts.append(tabulate(["c"], cap=2))
        acc = FrequencyAccumulator(cap=2)
        for part in parts:
            acc = combine_frequencies(acc, part)

        assert len(acc.counts) == 2
        assert acc.counts == {"a": 2, "b": 1}
        assert acc.n_obs == 4
        assert not acc.complete

    def test_cap_still_counts_tracked_categories(self):
        a = tabulate(["a", "b"], cap=2)
        b = tabulate(["c", "a", "a"], cap=2)
        acc = combine_frequencies(a, b)
        assert acc.counts == {"a": 3, "b": 1}

    def test_order_independent_below_cap(self):
        parts = [tabulate(list(s)) for s in ["abc", "cd", "", "aaz"]]
        forward = FrequencyAccumulator()
        for part in parts:
            forward = combine_frequencies(forward, part)
        backward = FrequencyAccumulator()
        for part in reversed(parts):
            backward = combine_frequencies(backward, part)

        assert dict(forward.counts) == dict(backward.counts)
        assert forward.complete and backward.complete
