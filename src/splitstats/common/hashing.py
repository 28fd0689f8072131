"""Key fingerprinting."""
from __future__ import annotations

import hashlib
import pickle
from typing import Any

# fixed protocol so that fingerprints do not depend on the interpreter default
_PICKLE_PROTOCOL = 4


def fingerprint(key: Any) -> str:
    """Compute a deterministic content fingerprint of a partition key.

    The fingerprint is the md5 hex digest of the pickled key. Equal keys of
    the usual key types (strings, numbers, tuples of those) always map to
    the same fingerprint, across processes and interpreter runs.

    Args:
        key (Any): The partition key.

    Returns:
        str: The hex digest.
    """
    data = pickle.dumps(key, protocol=_PICKLE_PROTOCOL)
    return hashlib.md5(data).hexdigest()
