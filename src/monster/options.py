"""
Monster Tokenizer Configuration
===============================

Options that change how source text is tokenized. Configuration can come
from:
- Default values (defined here)
- Environment variables, via TokenizerOptions.from_env()
- Command-line flags of the mtok tool, which override both

Environment Variables
---------------------
| Variable              | Option                                |
|-----------------------|---------------------------------------|
| MONSTER_CI_STRING_OPS | case_insensitive_comparison_operators |
| MONSTER_SKIP_HASHES   | skip_directive_lines                  |

Accepted values are 1/0, true/false, yes/no and on/off (any case).
Anything else is ignored and the default kept.
"""

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def _parse_flag(value: Optional[str]) -> Optional[bool]:
    """Parse an environment flag, returning None if it is unset or invalid."""
    if value is None:
        return None
    value = value.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return None


@dataclass(frozen=True)
class TokenizerOptions:
    """
    Tokenizer configuration options.

    Attributes:
        case_insensitive_comparison_operators: Recognize the caseless
            comparison operators =i=, =I=, !=i= and !=I=. When off they are
            not matched at all, so "a =i= b" becomes a, =, i, =, b.
        skip_directive_lines: Ignore lines that start with '#', such as a
            "#!/usr/bin/monster" line at the top of a script.
    """
    case_insensitive_comparison_operators: bool = True
    skip_directive_lines: bool = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TokenizerOptions":
        """
        Create TokenizerOptions from environment variables.

        Args:
            environ: Mapping to read instead of os.environ (for tests)
        """
        if environ is None:
            environ = os.environ

        options = cls()

        if (flag := _parse_flag(environ.get("MONSTER_CI_STRING_OPS"))) is not None:
            options = replace(options, case_insensitive_comparison_operators=flag)

        if (flag := _parse_flag(environ.get("MONSTER_SKIP_HASHES"))) is not None:
            options = replace(options, skip_directive_lines=flag)

        return options
