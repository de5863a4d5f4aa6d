"""
Completion model catalogs.

Each catalog is a ``str`` enum whose value is the wire model code, so members
can be passed anywhere a model string is expected. Members also carry a
human-readable ``description`` and the model's ``max_tokens`` context size.
"""
from __future__ import annotations

from enum import Enum
from typing import Protocol, Type, TypeVar, runtime_checkable

_M = TypeVar("_M", bound="_ModelCatalog")


@runtime_checkable
class CompletionModel(Protocol):
    """Capability shared by every catalog entry."""

    @property
    def code(self) -> str: ...

    @property
    def description(self) -> str: ...

    @property
    def max_tokens(self) -> int: ...


class _ModelCatalog(str, Enum):
    def __new__(cls, code: str, description: str, max_tokens: int):
        obj = str.__new__(cls, code)
        obj._value_ = code
        obj._description = description
        obj._max_tokens = max_tokens
        return obj

    @property
    def code(self) -> str:
        return self.value

    @property
    def description(self) -> str:
        return self._description

    @property
    def max_tokens(self) -> int:
        return self._max_tokens

    @classmethod
    def find_by_code(cls: Type[_M], code: str) -> _M:
        """Return the member whose code equals ``code``.

        Raises:
            ValueError: When no member matches.
        """
        for member in cls:
            if member.code == code:
                return member
        raise ValueError(f"unknown {cls.__name__} code: {code!r}")


class ChatCompletionModel(_ModelCatalog):
    GPT_3_5 = ("gpt-3.5-turbo", "GPT-3.5 (4k)", 4096)
    GPT_3_5_16K = ("gpt-3.5-turbo-16k", "GPT-3.5 (16k)", 16384)
    GPT_4 = ("gpt-4", "GPT-4 (8k)", 8192)
    GPT_4_32K = ("gpt-4-32k", "GPT-4 (32k)", 32768)


class TextCompletionModel(_ModelCatalog):
    ADA = ("text-ada-001", "Ada - Fastest", 2049)
    BABBAGE = ("text-babbage-001", "Babbage - Powerful", 2049)
    CURIE = ("text-curie-001", "Curie - Fast and efficient", 2049)
    DAVINCI = ("text-davinci-003", "Davinci - Most powerful (Default)", 4097)


__all__ = ["CompletionModel", "ChatCompletionModel", "TextCompletionModel"]
