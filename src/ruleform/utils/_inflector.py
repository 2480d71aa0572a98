# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

import re

__all__ = ("camel_to_words",)

_UPPER_START = re.compile(r"(?<![A-Z])[A-Z]")
_SEPARATORS = re.compile(r"[-_.]")


def camel_to_words(name: str, capitalize: bool = True) -> str:
    """Turn an identifier into space-separated words.

    Examples:
        camel_to_words("firstName")         -> "First Name"
        camel_to_words("underscore_style")  -> "Underscore Style"
        camel_to_words("api.key", False)    -> "api key"
    """
    spaced = _SEPARATORS.sub(" ", _UPPER_START.sub(r" \g<0>", name))
    words = spaced.lower().split()
    if capitalize:
        words = [word[:1].upper() + word[1:] for word in words]
    return " ".join(words)
