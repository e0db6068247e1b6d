"""Encryption policy.

Every operation also takes these settings as keyword arguments; `Config`
bundles them for callers that want to fix a policy once.
"""

from dataclasses import dataclass, field

from tlock.errors import InvalidConfig
from tlock.objects import DEFAULT_SCHEME, Scheme, get_scheme

_TRUE = ("true", "yes", "on", "1")
_FALSE = ("false", "no", "off", "0")


def _flag(data, key, default):
    value = data.get(key, default)
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        if value.strip().lower() in _TRUE:
            return True
        if value.strip().lower() in _FALSE:
            return False
    raise InvalidConfig(key, value)


@dataclass(frozen=True)
class Config:
    """Timelock encryption policy.

    Attributes
    ----------
    scheme : Scheme
        beacon scheme the keys and signatures belong to
    checked : bool
        verify `U == r'G` on decryption. Turning this off makes any
        well-formed ciphertext decrypt to something and reduces the scheme
        to IND-ID-CPA: tampering is no longer detected.
    allow_empty : bool
        accept zero-length plaintexts
    """
    scheme: Scheme = field(default=DEFAULT_SCHEME)
    checked: bool = True
    allow_empty: bool = True

    @classmethod
    def from_dict(cls, data):
        """Build a policy from parsed settings.

        Flags take booleans or the strings true/false, yes/no, on/off, 1/0;
        anything else raises `InvalidConfig`.
        """
        return cls(
            scheme=get_scheme(data.get("scheme", DEFAULT_SCHEME)),
            checked=_flag(data, "checked", True),
            allow_empty=_flag(data, "allow_empty", True),
        )

    def __post_init__(self):
        if not isinstance(self.scheme, Scheme):
            object.__setattr__(self, "scheme", get_scheme(self.scheme))
