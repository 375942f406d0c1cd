"""VM stack-language to Hack assembly translator."""
from .errors import TranslationError
from .translator import assemble, translate, translate_text

__all__ = ["TranslationError", "assemble", "translate", "translate_text"]
