from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence, Tuple

from rna_topology.errors import InvalidInputError

N_FIELDS = 8


@dataclass(frozen=True, slots=True)
class ConformationalFields:
    """
    The eight boolean descriptors of a nucleotide's local conformational state.

    The engine treats the flags as opaque booleans; the names only document
    which flag each scoring rule reads.

    Attributes
    ----------
    e0 : bool
        Pairing state.
    e1 : bool
        Stacking.
    e2 : bool
        Sugar pucker (C3'-endo).
    e3 : bool
        Canonical backbone torsion.
    e4 : bool
        Tertiary interaction.
    e5 : bool
        Edge accessibility.
    e6 : bool
        Backbone exposure.
    e7 : bool
        Ion coordination.
    """
    e0: bool = False
    e1: bool = False
    e2: bool = False
    e3: bool = False
    e4: bool = False
    e5: bool = False
    e6: bool = False
    e7: bool = False

    def as_tuple(self) -> Tuple[bool, ...]:
        """Flags in order `e0..e7`."""
        return (self.e0, self.e1, self.e2, self.e3, self.e4, self.e5, self.e6, self.e7)

    def active_count(self) -> int:
        """Number of flags that are set."""
        return sum(self.as_tuple())

    def to_index(self) -> int:
        """
        Pack the flags into an 8-bit integer where bit `k` holds `e_k`.

        Returns
        -------
        int
            Value in `0..255`.
        """
        return sum(1 << k for k, flag in enumerate(self.as_tuple()) if flag)

    @classmethod
    def from_index(cls, index: int) -> ConformationalFields:
        """
        Unpack an 8-bit integer produced by `to_index`.

        Raises
        ------
        InvalidInputError
            If `index` is outside `0..255`.
        """
        if not 0 <= index < (1 << N_FIELDS):
            raise InvalidInputError(f"Field index must be in 0..255, got {index}.")
        return cls(*(bool(index >> k & 1) for k in range(N_FIELDS)))


# Default state for a nucleotide with no external information: unpaired,
# edge-accessible, backbone exposed.
DEFAULT_FIELDS = ConformationalFields(e5=True, e6=True)


@dataclass(frozen=True, slots=True)
class NucleotideState:
    """
    Immutable per-nucleotide input record.

    Attributes
    ----------
    position : int
        1-indexed sequence position.
    base : str
        Base symbol (A, U, G, C; T and lower case are accepted).
    fields : ConformationalFields
        The eight conformational flags.
    tag : Optional[int]
        Opaque integer tag. When omitted, the packed field index is used.
    """
    position: int
    base: str
    fields: ConformationalFields = DEFAULT_FIELDS
    tag: Optional[int] = None

    @property
    def signature(self) -> int:
        """The tag used by loop signatures (falls back to the field index)."""
        return self.tag if self.tag is not None else self.fields.to_index()


@dataclass(frozen=True, slots=True)
class Molecule:
    """
    Ordered sequence of nucleotide states.

    Positions must run exactly `1..n` in order; this is checked on construction.
    """
    states: Tuple[NucleotideState, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any sequence but store a tuple so the snapshot stays immutable.
        object.__setattr__(self, "states", tuple(self.states))
        for expected, state in enumerate(self.states, start=1):
            if state.position != expected:
                raise InvalidInputError(
                    f"Nucleotide states must be ordered 1..n; found position "
                    f"{state.position} at index {expected}."
                )

    @classmethod
    def from_sequence(
        cls,
        seq: str,
        fields: Optional[Sequence[ConformationalFields]] = None,
        tags: Optional[Sequence[int]] = None,
    ) -> Molecule:
        """
        Build a molecule from a raw sequence.

        Parameters
        ----------
        seq : str
            Nucleotide sequence.
        fields : Optional[Sequence[ConformationalFields]]
            Per-position flags. Defaults to `DEFAULT_FIELDS` everywhere.
        tags : Optional[Sequence[int]]
            Per-position opaque tags.

        Raises
        ------
        InvalidInputError
            If `fields` or `tags` do not match the sequence length.
        """
        n = len(seq)
        if fields is not None and len(fields) != n:
            raise InvalidInputError(f"Expected {n} field records, got {len(fields)}.")
        if tags is not None and len(tags) != n:
            raise InvalidInputError(f"Expected {n} tags, got {len(tags)}.")

        states = tuple(
            NucleotideState(
                position=k + 1,
                base=base,
                fields=fields[k] if fields is not None else DEFAULT_FIELDS,
                tag=tags[k] if tags is not None else None,
            )
            for k, base in enumerate(seq)
        )
        return cls(states)

    @property
    def length(self) -> int:
        return len(self.states)

    @property
    def sequence(self) -> str:
        return "".join(state.base for state in self.states)

    def state(self, position: int) -> NucleotideState:
        """
        Return the state at a 1-indexed position.

        Raises
        ------
        InvalidInputError
            If the position does not exist.
        """
        if not 1 <= position <= len(self.states):
            raise InvalidInputError(f"Position {position} outside 1..{len(self.states)}.")
        return self.states[position - 1]

    def positions(self) -> range:
        return range(1, len(self.states) + 1)

    def __len__(self) -> int:
        return len(self.states)

    def __iter__(self) -> Iterator[NucleotideState]:
        return iter(self.states)
