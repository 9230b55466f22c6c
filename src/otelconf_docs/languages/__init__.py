from .implementations import (
    STATUSES,
    EnumOverride,
    FixResult,
    LanguageImplementation,
    PropertyOverride,
    TypeSupportStatus,
    fix_language_implementations,
    read_and_fix_language_implementations,
    read_language_implementations,
    remove_language_implementations,
    write_language_implementations,
)

__all__ = [
    "STATUSES",
    "EnumOverride",
    "FixResult",
    "LanguageImplementation",
    "PropertyOverride",
    "TypeSupportStatus",
    "fix_language_implementations",
    "read_and_fix_language_implementations",
    "read_language_implementations",
    "remove_language_implementations",
    "write_language_implementations",
]
