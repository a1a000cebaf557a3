"""Compile option flags for PCRE2 regular expressions."""

from enum import IntFlag

__all__ = ["PCRE2Flags"]


class PCRE2Flags(IntFlag):
    """PCRE2 compile options as bit flags."""

    ALLOW_EMPTY_CLASS = 0x00000001
    ALT_BSUX = 0x00000002
    AUTO_CALLOUT = 0x00000004
    CASELESS = 0x00000008
    DOLLAR_ENDONLY = 0x00000010
    DOTALL = 0x00000020
    DUPNAMES = 0x00000040
    EXTENDED = 0x00000080
    FIRSTLINE = 0x00000100
    MATCH_UNSET_BACKREF = 0x00000200
    MULTILINE = 0x00000400
    NEVER_UCP = 0x00000800
    NEVER_UTF = 0x00001000
    NO_AUTO_CAPTURE = 0x00002000
    NO_AUTO_POSSESS = 0x00004000
    NO_DOTSTAR_ANCHOR = 0x00008000
    NO_START_OPTIMIZE = 0x00010000
    UCP = 0x00020000
    UNGREEDY = 0x00040000
    UTF = 0x00080000
    ANCHORED = 0x80000000
    NO_UTF_CHECK = 0x40000000