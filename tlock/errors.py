"""Typed failures raised by the timelock encryption core.

Every error carries an `ErrorCode` so calling code can tell bad input data
(codes 1xxx-3xxx) apart from a security rejection (4xxx) without parsing
messages. None of these are retried internally: they are deterministic
functions of the input.
"""

from enum import IntEnum
from typing import Any, Optional


class ErrorCode(IntEnum):
    """Error codes."""

    # 1xxx - input values
    INVALID_ROUND = 1001
    UNKNOWN_SCHEME = 1002
    EMPTY_PLAINTEXT = 1003
    INVALID_CONFIG = 1004

    # 2xxx - curve points
    INVALID_ENCODING = 2001
    NOT_IN_SUBGROUP = 2002
    INVALID_PUBLIC_KEY = 2003

    # 3xxx - ciphertexts
    MALFORMED_CIPHERTEXT = 3001
    AMBIGUOUS_LENGTH = 3002
    TOO_SHORT = 3003
    NEGATIVE_LENGTH = 3004

    # 4xxx - security rejections
    INTEGRITY_CHECK_FAILED = 4001

    # 9xxx - internal
    SCALAR_DERIVATION_FAILED = 9001


class TlockError(Exception):
    """Base exception for all timelock encryption errors."""

    code = None

    def __init__(self, message: str, details: Optional[Any] = None, code: Optional[ErrorCode] = None):
        if code is not None:
            self.code = code
        self.message = message
        self.details = details
        super().__init__(f"[{self.code.value}] {message}" if self.code is not None else message)

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dict."""
        result = {
            "code": self.code.value,
            "name": self.code.name,
            "message": self.message,
        }
        if self.details is not None:
            result["details"] = self.details
        return result


# ==============================================================================
# Input values (1xxx)
# ==============================================================================

class InvalidRound(TlockError, ValueError):
    code = ErrorCode.INVALID_ROUND

    def __init__(self, round_number: Any):
        super().__init__(
            f"Round must be an integer in [0, 2**64 - 1], got {round_number!r}",
            {"round": repr(round_number)},
        )


class UnknownScheme(TlockError, ValueError):
    code = ErrorCode.UNKNOWN_SCHEME

    def __init__(self, scheme_id: str):
        super().__init__(f"Unsupported beacon scheme: {scheme_id}", {"scheme": scheme_id})


class EmptyPlaintext(TlockError, ValueError):
    code = ErrorCode.EMPTY_PLAINTEXT

    def __init__(self):
        super().__init__("Empty plaintexts are disallowed by the configured policy")


class InvalidConfig(TlockError, ValueError):
    code = ErrorCode.INVALID_CONFIG

    def __init__(self, key: str, value: Any):
        super().__init__(f"Invalid value for {key}: {value!r}", {"key": key, "value": repr(value)})


# ==============================================================================
# Curve points (2xxx)
# ==============================================================================

class PointError(TlockError, ValueError):
    """A point supplied from outside does not validate."""


class InvalidEncoding(PointError):
    code = ErrorCode.INVALID_ENCODING

    def __init__(self, group: str, reason: str):
        super().__init__(f"Invalid {group} encoding: {reason}", {"group": group})


class NotInSubgroup(PointError):
    code = ErrorCode.NOT_IN_SUBGROUP

    def __init__(self, group: str):
        super().__init__(f"Point is on the curve but not in the {group} subgroup", {"group": group})


class InvalidPublicKey(TlockError, ValueError):
    code = ErrorCode.INVALID_PUBLIC_KEY

    def __init__(self, reason: str):
        super().__init__(f"Invalid beacon public key: {reason}")


# ==============================================================================
# Ciphertexts (3xxx)
# ==============================================================================

class MalformedCiphertext(TlockError, ValueError):
    code = ErrorCode.MALFORMED_CIPHERTEXT

    def __init__(self, reason: str):
        super().__init__(f"Malformed ciphertext: {reason}")


class CodecError(TlockError, ValueError):
    """The codec cannot split a byte string into U, V and W."""


class AmbiguousLength(CodecError):
    code = ErrorCode.AMBIGUOUS_LENGTH

    def __init__(self, remaining: int):
        super().__init__(
            f"Cannot split {remaining} bytes after U evenly into V and W",
            {"remaining": remaining},
        )


class TooShort(CodecError):
    code = ErrorCode.TOO_SHORT

    def __init__(self, length: int, required: int):
        super().__init__(
            f"Ciphertext too short: {length} < {required} bytes",
            {"length": length, "required": required},
        )


class NegativeLength(CodecError):
    code = ErrorCode.NEGATIVE_LENGTH

    def __init__(self, field: str, length: int):
        super().__init__(
            f"Length of {field} must not be negative, got {length}",
            {"field": field, "length": length},
        )


# ==============================================================================
# Security rejections (4xxx)
# ==============================================================================

class IntegrityCheckFailed(TlockError):
    code = ErrorCode.INTEGRITY_CHECK_FAILED

    def __init__(self):
        super().__init__("Ciphertext integrity check failed: U != r'G")


class ScalarDerivationFailed(TlockError):
    code = ErrorCode.SCALAR_DERIVATION_FAILED

    def __init__(self):
        super().__init__("Could not derive a scalar below the group order")
