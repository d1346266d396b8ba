import string


class OcamlDemangleError(Exception):
    def __init__(self, given_str, message="Not able to demangle the given string using OcamlDemangler"):
        self.message = message
        self.given_str = given_str
        super().__init__(self.message)

    def __str__(self):
        return f"[{self.given_str}] {self.message}"


class InputTooShort(OcamlDemangleError):
    def __init__(self, given_str, message="Mangled name is shorter than the minimum of 5 bytes"):
        super().__init__(given_str, message)


class SchemeNotFoundError(OcamlDemangleError):
    def __init__(self, given_str, message="Not an OCaml mangled name (missing 'caml' prefix)"):
        super().__init__(given_str, message)


class OcamlDemangler:
    """Decoder for names mangled by the OCaml native code compiler.

    The mangled form is "caml" + body, where the body encodes a module path:
        "__"  -> "."     (module separator)
        "$xx" -> 0xXX    (hex-escaped byte, high nibble first)
        other -> copied through unchanged
    The compiler appends "_<digits>" to keep otherwise identical names apart,
    this suffix is dropped from the decoded name.
    """

    SCHEME_PREFIX = b"caml"
    MIN_LENGTH = 5

    _HEX_DIGITS = frozenset(string.hexdigits.encode("ascii"))
    _DECIMAL_DIGITS = frozenset(string.digits.encode("ascii"))
    _SEPARATOR = b"__"
    _ESCAPE = ord("$")
    _UNDERSCORE = ord("_")

    def decode(self, mangled) -> bytes:
        """Decode a mangled name, skipping the 4 byte scheme tag without looking at it.

        Args:
            mangled (bytes): mangled name, at least MIN_LENGTH bytes long

        Raises:
            InputTooShort: if the name is shorter than MIN_LENGTH

        Returns:
            bytes: the decoded name
        """
        if not isinstance(mangled, (bytes, bytearray, memoryview)):
            raise TypeError(f"expected a bytes-like object, got {type(mangled).__name__}")
        mangled = bytes(mangled)
        if len(mangled) < self.MIN_LENGTH:
            raise InputTooShort(mangled)
        return self.trim_suffix(self.decode_body(mangled, len(self.SCHEME_PREFIX)))

    def decode_body(self, mangled: bytes, offset: int = 0) -> bytes:
        decoded = bytearray()
        index = offset
        length = len(mangled)
        while index < length:
            if mangled[index:index + 2] == self._SEPARATOR:
                decoded.append(ord("."))
                index += 2
            elif (
                mangled[index] == self._ESCAPE
                and index + 2 < length
                and mangled[index + 1] in self._HEX_DIGITS
                and mangled[index + 2] in self._HEX_DIGITS
            ):
                decoded.append(int(mangled[index + 1:index + 3], 16))
                index += 3
            else:
                decoded.append(mangled[index])
                index += 1
        return bytes(decoded)

    def trim_suffix(self, decoded: bytes) -> bytes:
        """Drop a trailing "_<digits>" disambiguation suffix, if there is one."""
        if not decoded or decoded[-1] not in self._DECIMAL_DIGITS:
            return decoded
        cursor = len(decoded) - 1
        while cursor >= 0 and decoded[cursor] in self._DECIMAL_DIGITS:
            cursor -= 1
        if cursor >= 0 and decoded[cursor] == self._UNDERSCORE:
            return decoded[:cursor]
        return decoded

    def is_ocaml_symbol(self, name: str) -> bool:
        """Check if a symbol name appears to be an OCaml mangled name.

        Mach-O prepends a single underscore to every symbol, so "_caml" is accepted too.
        Names like "caml_alloc" or "caml_startup" belong to the C runtime and are not mangled.
        """
        name = self.strip_symbol_prefix(name)
        if len(name) < self.MIN_LENGTH or not name.startswith("caml"):
            return False
        return name[len(self.SCHEME_PREFIX)] != "_"

    def strip_symbol_prefix(self, name: str) -> str:
        if name.startswith("_caml"):
            return name[1:]
        return name

    def demangle(self, name: str) -> str:
        if not self.is_ocaml_symbol(name):
            raise SchemeNotFoundError(name)
        try:
            mangled = self.strip_symbol_prefix(name).encode("utf-8", "surrogateescape")
        except UnicodeEncodeError as exc:
            raise OcamlDemangleError(name, f"Symbol name is not encodable as bytes: {exc.reason}") from exc
        return self.decode(mangled).decode("utf-8", "backslashreplace")
