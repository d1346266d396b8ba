from .main import decode, demangle, demangle_bytes, is_ocaml_symbol, strip_symbol_prefix
from .ocaml import InputTooShort, OcamlDemangleError, OcamlDemangler, SchemeNotFoundError

__all__ = [
    "decode",
    "demangle",
    "demangle_bytes",
    "is_ocaml_symbol",
    "strip_symbol_prefix",
    "InputTooShort",
    "OcamlDemangleError",
    "OcamlDemangler",
    "SchemeNotFoundError",
]
