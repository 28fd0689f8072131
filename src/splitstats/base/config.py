"""Provides the base configuration classes used throughout the package.

Every configurable component (aggregators, executors, the attribute
registry) is parameterized by a pydantic model deriving from
:class:`BaseConfig`. Components themselves derive from
:class:`BaseConfigurable`, which binds a component to its configuration
and allows building it either from a configuration object or from
keyword arguments.

Usage Example:

    .. code-block:: python

        from splitstats.base.config import BaseConfig, BaseConfigurable

        class CounterConfig(BaseConfig):
            start: int = 0

        class Counter(BaseConfigurable[CounterConfig]):
            def value(self) -> int:
                return self.config.start

        Counter(start=5).value()  # 5
        Counter.from_config(CounterConfig(start=2)).value()  # 2
"""
from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict

from .generic import solve_typevar


class BaseConfig(BaseModel):
    """Base configuration model.

    Configurations are immutable once created and reject unknown fields,
    so that typos in keyword arguments surface as validation errors.
    """

    model_config = ConfigDict(
        frozen=True, extra="forbid", arbitrary_types_allowed=True
    )


C = TypeVar("C", bound=BaseConfig)


class BaseConfigurable(Generic[C]):
    """Base class of all components that are parameterized by a configuration.

    The concrete configuration type is resolved from the generic type
    argument of the subclass, i.e. :code:`BaseConfigurable[MyConfig]`.
    """

    def __init__(self, config: None | C = None, **kwargs: Any) -> None:
        """Initialize the configurable.

        Args:
            config (C, optional): The configuration object. If not provided,
                a configuration is created from the keyword arguments.
            **kwargs (Any): Keyword arguments that update the provided
                configuration or build a new one if none is provided.
        """
        if config is None:
            config = self.build_config(**kwargs)
        elif len(kwargs) > 0:
            config = config.model_copy(update=kwargs)

        self._config = config

    @classmethod
    def build_config(cls, **kwargs: Any) -> C:
        """Build a configuration instance of the type bound to this class.

        Args:
            **kwargs (Any): The configuration values.

        Returns:
            C: The configuration instance.
        """
        return solve_typevar(cls, C)(**kwargs)

    @classmethod
    def from_config(cls, config: C) -> BaseConfigurable[C]:
        """Create an instance from a configuration object.

        Args:
            config (C): The configuration.

        Returns:
            BaseConfigurable[C]: The configured instance.
        """
        return cls(config)

    @property
    def config(self) -> C:
        """The configuration of the instance."""
        return self._config
