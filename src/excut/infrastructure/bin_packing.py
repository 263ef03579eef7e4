"""Bin packing data models and algorithms for linear stock optimization.

This module provides the greedy cutting stock engine: cutouts are sorted by
length (longest first) and assigned to stock segments ("bins") one at a
time, charging one saw kerf per piece. Which open bin receives the next
cutout is decided by a pluggable bin selection policy.

Sealed bins and packing results are frozen dataclasses. The mutable bin
state only exists for the duration of a single ``optimize`` call.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import ClassVar, Protocol, Sequence, runtime_checkable

from excut.domain import Cutout, CuttingConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Bin:
    """A sealed stock segment with its assigned cutouts.

    Attributes:
        index: Zero-based creation order of this bin in the packing result.
        stock_size: Length of the stock segment.
        used: Sum of the sizes of all assigned cutouts.
        cuts: Total material consumed by saw cuts.
        cutouts: Assigned cutouts in assignment order.
    """

    index: int
    stock_size: int
    used: int
    cuts: int
    cutouts: tuple[Cutout, ...]

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError("Bin index must be non-negative")
        if not self.cutouts:
            raise ValueError("Bin must hold at least one cutout")
        if self.used != sum(c.size for c in self.cutouts):
            raise ValueError("Bin usage does not match its cutouts")
        if self.rest < 0:
            raise ValueError(
                f"Bin {self.index} overflows stock: "
                f"{self.used} used + {self.cuts} cuts > {self.stock_size}"
            )

    @property
    def rest(self) -> int:
        """Leftover length after all pieces and cuts."""
        return self.stock_size - self.used - self.cuts

    @property
    def piece_count(self) -> int:
        """Number of cutouts assigned to this bin."""
        return len(self.cutouts)

    @property
    def sizes(self) -> tuple[int, ...]:
        return tuple(c.size for c in self.cutouts)

    @property
    def labels(self) -> tuple[str | None, ...]:
        return tuple(c.label for c in self.cutouts)

    @property
    def waste_percentage(self) -> float:
        """Percentage of the stock not turned into pieces (kerf plus rest)."""
        return (1 - self.used / self.stock_size) * 100


@dataclass(frozen=True)
class PackingResult:
    """Complete result of a packing run.

    Attributes:
        config: Configuration the run was performed with.
        bins: Sealed bins in creation order.
        policy: Name of the bin selection policy used.
    """

    config: CuttingConfig
    bins: tuple[Bin, ...]
    policy: str = "current"

    @property
    def total_bins(self) -> int:
        return len(self.bins)

    @property
    def total_pieces(self) -> int:
        return sum(b.piece_count for b in self.bins)

    @property
    def total_used(self) -> int:
        return sum(b.used for b in self.bins)

    @property
    def total_cuts(self) -> int:
        return sum(b.cuts for b in self.bins)

    @property
    def total_rest(self) -> int:
        return sum(b.rest for b in self.bins)

    @property
    def total_stock(self) -> int:
        """Total length of stock consumed by the plan."""
        return self.total_bins * self.config.stock_size

    @property
    def waste_percentage(self) -> float:
        """Overall percentage of purchased stock not turned into pieces."""
        if not self.bins:
            return 0.0
        return (1 - self.total_used / self.total_stock) * 100

    @property
    def lower_bound(self) -> int:
        """Minimum number of bins any packing could use, ignoring kerf."""
        return math.ceil(self.total_used / self.config.stock_size)


@dataclass
class _OpenBin:
    """Internal mutable bin state used while packing.

    Attributes:
        index: Creation order of the bin.
        stock_size: Length of the stock segment.
        capacity_used: Sum of assigned cutout sizes.
        cut_waste: Kerf charged so far.
        cutouts: Assigned cutouts in assignment order.
    """

    index: int
    stock_size: int
    capacity_used: int = 0
    cut_waste: int = 0
    cutouts: list[Cutout] = field(default_factory=list)

    @property
    def remaining(self) -> int:
        return self.stock_size - self.capacity_used - self.cut_waste

    def accepts(self, cutout: Cutout, kerf: int) -> bool:
        """Check if the cutout plus one kerf fits in the remaining length."""
        return self.remaining >= cutout.size + kerf

    def add(self, cutout: Cutout, kerf: int) -> None:
        """Assign a cutout, charging one kerf.

        A piece that leaves less than a kerf behind is charged only what is
        left, since no material remains to separate it from.
        """
        charged = max(0, min(kerf, self.remaining - cutout.size))
        self.cutouts.append(cutout)
        self.capacity_used += cutout.size
        self.cut_waste += charged

    def seal(self) -> Bin:
        return Bin(
            index=self.index,
            stock_size=self.stock_size,
            used=self.capacity_used,
            cuts=self.cut_waste,
            cutouts=tuple(self.cutouts),
        )


@runtime_checkable
class BinSelectionPolicy(Protocol):
    """Protocol for choosing the open bin that receives the next cutout.

    Attributes:
        name: Registry name of the policy.
        revisits: Whether bins other than the newest stay open. Policies that
            do not revisit have their current bin sealed as soon as a new one
            is opened.
    """

    name: ClassVar[str]
    revisits: ClassVar[bool]

    def select(
        self,
        open_bins: Sequence[_OpenBin],
        cutout: Cutout,
        kerf: int,
    ) -> _OpenBin | None:
        """Return the bin to place the cutout into, or None to open a new one."""
        ...


class PolicyRegistry:
    """Registry of bin selection policies by name.

    Example:
        @PolicyRegistry.register("first-fit")
        class FirstFitPolicy:
            ...
    """

    _policies: ClassVar[dict[str, type[BinSelectionPolicy]]] = {}

    @classmethod
    def register(cls, name: str):
        def decorator(policy_class: type) -> type:
            if name in cls._policies:
                logger.warning("Overwriting existing policy '%s'", name)
            cls._policies[name] = policy_class
            return policy_class

        return decorator

    @classmethod
    def get(cls, name: str) -> type[BinSelectionPolicy]:
        """Get a policy class by name.

        Raises:
            KeyError: If no policy is registered under the name.
        """
        if name not in cls._policies:
            available = ", ".join(sorted(cls._policies))
            raise KeyError(
                f"No bin selection policy named '{name}'. "
                f"Available policies: {available or 'none'}"
            )
        return cls._policies[name]

    @classmethod
    def available(cls) -> list[str]:
        return sorted(cls._policies)


@PolicyRegistry.register("current")
class CurrentBinPolicy:
    """Place into the most recently opened bin only.

    Mirrors a fabricator working through a sorted stack of pieces: once a
    piece does not fit on the stock in hand, that stock is set aside and
    never picked up again.
    """

    name: ClassVar[str] = "current"
    revisits: ClassVar[bool] = False

    def select(
        self,
        open_bins: Sequence[_OpenBin],
        cutout: Cutout,
        kerf: int,
    ) -> _OpenBin | None:
        if open_bins and open_bins[-1].accepts(cutout, kerf):
            return open_bins[-1]
        return None


@PolicyRegistry.register("first-fit")
class FirstFitPolicy:
    """Place into the earliest opened bin that has room."""

    name: ClassVar[str] = "first-fit"
    revisits: ClassVar[bool] = True

    def select(
        self,
        open_bins: Sequence[_OpenBin],
        cutout: Cutout,
        kerf: int,
    ) -> _OpenBin | None:
        for candidate in open_bins:
            if candidate.accepts(cutout, kerf):
                return candidate
        return None


@PolicyRegistry.register("best-fit")
class BestFitPolicy:
    """Place into the bin left with the least remaining length.

    Ties go to the earliest opened bin.
    """

    name: ClassVar[str] = "best-fit"
    revisits: ClassVar[bool] = True

    def select(
        self,
        open_bins: Sequence[_OpenBin],
        cutout: Cutout,
        kerf: int,
    ) -> _OpenBin | None:
        best: _OpenBin | None = None
        for candidate in open_bins:
            if not candidate.accepts(cutout, kerf):
                continue
            if best is None or candidate.remaining < best.remaining:
                best = candidate
        return best


def get_policy(policy: str | BinSelectionPolicy) -> BinSelectionPolicy:
    """Resolve a policy name to an instance; instances pass through."""
    if isinstance(policy, str):
        return PolicyRegistry.get(policy)()
    return policy


def available_policies() -> list[str]:
    """Names of all registered bin selection policies."""
    return PolicyRegistry.available()


class CuttingOptimizer:
    """Greedy decreasing-length packer for linear stock.

    Cutouts are stable-sorted by size (longest first, equal sizes keep their
    input order) and placed one at a time. For every cutout the selection
    policy picks an open bin with room for ``size + kerf``; when none is
    chosen a new bin is opened and always accepts the cutout.

    The optimizer assumes every cutout satisfies ``0 < size <= stock_size``.
    The cutting table parser filters out anything else.

    Attributes:
        policy: Bin selection policy in use.
    """

    def __init__(self, policy: str | BinSelectionPolicy = "current") -> None:
        """Initialize the optimizer.

        Args:
            policy: Policy name from the registry or a policy instance.

        Raises:
            KeyError: If the policy name is not registered.
        """
        self.policy = get_policy(policy)

    def optimize(
        self,
        config: CuttingConfig,
        cutouts: Sequence[Cutout],
    ) -> PackingResult:
        """Pack cutouts into as few bins as the heuristic achieves.

        Args:
            config: Stock size and kerf for the run.
            cutouts: Pieces to place. May be empty.

        Returns:
            PackingResult with bins in creation order.
        """
        if not cutouts:
            return PackingResult(config=config, bins=(), policy=self.policy.name)

        ordered = self._sort_by_size(cutouts)
        kerf = config.kerf

        logger.debug(
            "Packing %d cutouts into %d-long stock (kerf %d, policy %s)",
            len(ordered),
            config.stock_size,
            kerf,
            self.policy.name,
        )

        sealed: list[Bin] = []
        open_bins: list[_OpenBin] = []

        for cutout in ordered:
            target = self.policy.select(open_bins, cutout, kerf)
            if target is None:
                if open_bins and not self.policy.revisits:
                    sealed.append(open_bins.pop().seal())
                target = _OpenBin(
                    index=len(sealed) + len(open_bins),
                    stock_size=config.stock_size,
                )
                open_bins.append(target)
            target.add(cutout, kerf)

        sealed.extend(b.seal() for b in open_bins)
        bins = tuple(sorted(sealed, key=lambda b: b.index))

        for b in bins:
            logger.debug(
                "Bin %d: %d pieces, used %d, cuts %d, rest %d",
                b.index,
                b.piece_count,
                b.used,
                b.cuts,
                b.rest,
            )

        result = PackingResult(config=config, bins=bins, policy=self.policy.name)
        logger.info(
            "Packed %d cutouts into %d bins (%.1f%% waste)",
            result.total_pieces,
            result.total_bins,
            result.waste_percentage,
        )
        return result

    def _sort_by_size(self, cutouts: Sequence[Cutout]) -> list[Cutout]:
        """Stable sort by size, longest first.

        ``sorted`` with ``reverse=True`` keeps equal elements in input order.
        """
        return sorted(cutouts, key=lambda c: c.size, reverse=True)


def optimize(
    config: CuttingConfig,
    cutouts: Sequence[Cutout],
    policy: str | BinSelectionPolicy = "current",
) -> tuple[Bin, ...]:
    """Pack cutouts and return the bins in creation order.

    Args:
        config: Stock size and kerf for the run.
        cutouts: Pieces to place, each with ``0 < size <= stock_size``.
        policy: Bin selection policy name or instance.

    Returns:
        Tuple of sealed bins. Empty when there are no cutouts.
    """
    return CuttingOptimizer(policy).optimize(config, cutouts).bins
