"""
Input schema of the fair-exchange circuit.

Every value is a field element or a 64-bit limb. Shapes and ranges are
validated on construction: a malformed input is a caller error
(``ValidationError``), distinct from a well-formed but unsatisfiable witness.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple, Union

from ..constants import (
    CIPHERTEXT_LENGTH,
    FIELD_MODULUS,
    LIMB_BITS,
    LIMB_COUNT,
    PREIMAGE_LENGTH,
)
from ..errors import ValidationError, create_validation_error
from .circuits import PublicInputs

Limbs = Tuple[int, ...]

PUBLIC_INPUT_NAMES = ("Hpub[0]", "Hpub[1]")


def int_to_limbs(value: int, count: int = LIMB_COUNT, bits: int = LIMB_BITS) -> Limbs:
    """Split ``value`` into ``count`` little-endian limbs of ``bits`` bits."""
    if value < 0 or value >> (count * bits):
        raise create_validation_error("value", value, f"0 <= value < 2^{count * bits}")
    mask = (1 << bits) - 1
    return tuple((value >> (bits * i)) & mask for i in range(count))


def limbs_to_int(limbs: Sequence[int], bits: int = LIMB_BITS) -> int:
    """Join little-endian limbs into an integer."""
    return sum(limb << (bits * i) for i, limb in enumerate(limbs))


def _parse_int(value: Union[int, str], name: str) -> int:
    if isinstance(value, bool):
        raise create_validation_error(name, value, "integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value, 0)
        except ValueError:
            raise create_validation_error(name, value, "decimal or 0x-prefixed integer")
    raise create_validation_error(name, value, "integer")


def _check_sequence(values: Any, name: str) -> Sequence[Any]:
    if not isinstance(values, (list, tuple)):
        raise create_validation_error(name, values, "list")
    return values


def _check_limbs(values: Sequence[Any], name: str) -> Limbs:
    _check_sequence(values, name)
    if len(values) != LIMB_COUNT:
        raise create_validation_error(name, len(values), f"{LIMB_COUNT} limbs")
    limbs = tuple(_parse_int(v, f"{name}[{i}]") for i, v in enumerate(values))
    for i, limb in enumerate(limbs):
        if not 0 <= limb < 1 << LIMB_BITS:
            raise create_validation_error(f"{name}[{i}]", limb, f"0 <= limb < 2^{LIMB_BITS}")
    return limbs


def _check_elements(values: Sequence[Any], length: int, name: str) -> List[int]:
    _check_sequence(values, name)
    if len(values) != length:
        raise create_validation_error(name, len(values), f"{length} field elements")
    elements = [_parse_int(v, f"{name}[{i}]") for i, v in enumerate(values)]
    for i, element in enumerate(elements):
        if not 0 <= element < FIELD_MODULUS:
            raise create_validation_error(f"{name}[{i}]", element, "field element")
    return elements


@dataclass(frozen=True)
class CurvePoint:
    """Affine point with 4x64-bit limbs per coordinate."""

    x: Limbs
    y: Limbs

    def __post_init__(self):
        object.__setattr__(self, "x", _check_limbs(self.x, "x"))
        object.__setattr__(self, "y", _check_limbs(self.y, "y"))

    @classmethod
    def from_ints(cls, x: int, y: int) -> "CurvePoint":
        return cls(int_to_limbs(x), int_to_limbs(y))

    @classmethod
    def from_affine(cls, point: Tuple[int, int]) -> "CurvePoint":
        return cls.from_ints(point[0], point[1])

    def to_affine(self) -> Tuple[int, int]:
        return limbs_to_int(self.x), limbs_to_int(self.y)

    def to_list(self) -> List[List[str]]:
        return [[str(limb) for limb in self.x], [str(limb) for limb in self.y]]

    @classmethod
    def from_list(cls, data: Sequence[Sequence[Any]], name: str = "point") -> "CurvePoint":
        _check_sequence(data, name)
        if len(data) != 2:
            raise create_validation_error(name, len(data), "[x limbs, y limbs]")
        try:
            return cls(
                tuple(_check_sequence(data[0], f"{name}.x")),
                tuple(_check_sequence(data[1], f"{name}.y")),
            )
        except ValidationError as e:
            raise ValidationError(f"{name}: {e.message}", field=name, value=e.value) from e


@dataclass(frozen=True)
class FairExchangeInputs:
    """Complete signal assignment for one proof instance."""

    preimage0: Tuple[int, ...]
    preimage1: Tuple[int, ...]
    db: Limbs
    qs: CurvePoint
    qa: CurvePoint
    qb: CurvePoint
    nonce: int
    ew: Tuple[int, ...]
    hpub: Tuple[int, int]

    def __post_init__(self):
        object.__setattr__(
            self, "preimage0", tuple(_check_elements(self.preimage0, PREIMAGE_LENGTH, "preimage0"))
        )
        object.__setattr__(
            self, "preimage1", tuple(_check_elements(self.preimage1, PREIMAGE_LENGTH, "preimage1"))
        )
        object.__setattr__(self, "db", _check_limbs(self.db, "db"))
        for name in ("qs", "qa", "qb"):
            if not isinstance(getattr(self, name), CurvePoint):
                raise create_validation_error(name, getattr(self, name), "CurvePoint")
        object.__setattr__(self, "nonce", _check_elements([self.nonce], 1, "nonce")[0])
        object.__setattr__(self, "ew", tuple(_check_elements(self.ew, CIPHERTEXT_LENGTH, "ew")))
        object.__setattr__(self, "hpub", tuple(_check_elements(self.hpub, 2, "Hpub")))

    @property
    def message(self) -> List[int]:
        """Plaintext: preimage0 followed by preimage1."""
        return list(self.preimage0) + list(self.preimage1)

    def public_inputs(self) -> PublicInputs:
        """Public input vector seen by a verifier."""
        public = PublicInputs()
        for name, value in zip(PUBLIC_INPUT_NAMES, self.hpub):
            public.add_input(name, value)
        return public

    def replace(self, **changes: Any) -> "FairExchangeInputs":
        """Copy with some fields replaced."""
        data = {
            "preimage0": self.preimage0,
            "preimage1": self.preimage1,
            "db": self.db,
            "qs": self.qs,
            "qa": self.qa,
            "qb": self.qb,
            "nonce": self.nonce,
            "ew": self.ew,
            "hpub": self.hpub,
        }
        data.update(changes)
        return FairExchangeInputs(**data)

    def to_dict(self) -> Dict[str, Any]:
        """circom ``input.json`` layout, numbers as decimal strings."""
        return {
            "preimage0": [str(v) for v in self.preimage0],
            "preimage1": [str(v) for v in self.preimage1],
            "db": [str(v) for v in self.db],
            "Qs": self.qs.to_list(),
            "Qa": self.qa.to_list(),
            "Qb": self.qb.to_list(),
            "nonce": str(self.nonce),
            "ew": [str(v) for v in self.ew],
            "Hpub": [str(v) for v in self.hpub],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FairExchangeInputs":
        missing = [
            key
            for key in ("preimage0", "preimage1", "db", "Qs", "Qa", "Qb", "nonce", "ew", "Hpub")
            if key not in data
        ]
        if missing:
            raise ValidationError(f"Missing inputs: {', '.join(missing)}", field=missing[0])
        return cls(
            preimage0=tuple(_check_sequence(data["preimage0"], "preimage0")),
            preimage1=tuple(_check_sequence(data["preimage1"], "preimage1")),
            db=tuple(_check_sequence(data["db"], "db")),
            qs=CurvePoint.from_list(data["Qs"], "Qs"),
            qa=CurvePoint.from_list(data["Qa"], "Qa"),
            qb=CurvePoint.from_list(data["Qb"], "Qb"),
            nonce=_parse_int(data["nonce"], "nonce"),
            ew=tuple(_check_sequence(data["ew"], "ew")),
            hpub=tuple(_check_sequence(data["Hpub"], "Hpub")),
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_json(cls, text: str) -> "FairExchangeInputs":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid input JSON: {e}", cause=e)
        if not isinstance(data, dict):
            raise create_validation_error("input", type(data).__name__, "JSON object")
        return cls.from_dict(data)
