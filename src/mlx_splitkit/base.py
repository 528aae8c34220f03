"""Base classes for MLX Splitkit splitters."""

from abc import ABC, abstractmethod
from typing import Any


class BaseSplitter(ABC):
    """Abstract base class for all splitters.

    A splitter bundles the three operations a tree-growth engine needs for
    one problem type: scoring a node, testing whether it is homogeneous and
    finding the best split of one feature. Splitters are stateless apart
    from their parameters, so one instance can serve any number of nodes.

    All splitters should specify all the parameters that can be set
    at the class level in their ``__init__`` as explicit keyword arguments.
    """

    @abstractmethod
    def find_split(self, order: Any, features: Any, *args: Any, **kwargs: Any) -> tuple:
        """Find the best threshold on one feature of a node.

        Args:
            order: Sample indices sorting ``features`` ascending.
            features: Feature value of every sample in the node.
            *args: Problem-specific per-sample statistics.
            **kwargs: Problem-specific options.

        Returns:
            Split record of the best threshold.
        """

    @abstractmethod
    def node_impurity(self, *args: Any) -> float:
        """Score a whole node.

        Returns:
            Impurity of the node.
        """

    @abstractmethod
    def is_homogeneous(self, y: Any) -> bool:
        """Check whether a node cannot be improved by splitting.

        Args:
            y: Labels or targets of the node.

        Returns:
            True if every sample shares one label or target.
        """

    def get_params(self) -> dict[str, Any]:
        """Get parameters for this splitter.

        Returns:
            Parameter names mapped to their values.
        """
        return {
            key: getattr(self, key)
            for key in self.__init__.__code__.co_varnames[1:]
            if hasattr(self, key)
        }

    def set_params(self, **params: Any) -> "BaseSplitter":
        """Set parameters for this splitter.

        Args:
            **params: Splitter parameters.

        Returns:
            Self for method chaining.

        Raises:
            ValueError: If a parameter name is not accepted by ``__init__``.
        """
        valid = self.__init__.__code__.co_varnames[1 : self.__init__.__code__.co_argcount]
        for key, value in params.items():
            if key not in valid:
                raise ValueError(
                    f"Invalid parameter {key!r} for {type(self).__name__}."
                )
            setattr(self, key, value)
        return self

    def __repr__(self) -> str:
        params = ", ".join(f"{k}={v!r}" for k, v in self.get_params().items())
        return f"{type(self).__name__}({params})"
