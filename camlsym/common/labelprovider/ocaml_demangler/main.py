from .ocaml import OcamlDemangler


def demangle(inp_str: str) -> str:
    """Demangle an OCaml mangled symbol name.

    Args:
        inp_str: The mangled symbol name to demangle, optionally with a leading Mach-O underscore.

    Returns:
        The demangled symbol name.

    Raises:
        SchemeNotFoundError: If the symbol doesn't carry the OCaml "caml" prefix.
    """
    demangler = OcamlDemangler()
    return demangler.demangle(inp_str)


def decode(mangled: bytes) -> bytes:
    """Decode a mangled name whose "caml" prefix has already been confirmed by the caller.

    Raises:
        InputTooShort: If the name is shorter than 5 bytes.
    """
    return OcamlDemangler().decode(mangled)


demangle_bytes = decode


def is_ocaml_symbol(name: str) -> bool:
    return OcamlDemangler().is_ocaml_symbol(name)


def strip_symbol_prefix(name: str) -> str:
    return OcamlDemangler().strip_symbol_prefix(name)
