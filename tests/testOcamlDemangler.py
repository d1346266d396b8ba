#!/usr/bin/python

import logging
import string
import unittest

from camlsym.common.labelprovider.ocaml_demangler import (
    InputTooShort,
    OcamlDemangleError,
    OcamlDemangler,
    SchemeNotFoundError,
    decode,
    demangle,
    demangle_bytes,
    is_ocaml_symbol,
    strip_symbol_prefix,
)

LOG = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO, format="%(asctime)-15s %(message)s")
logging.disable(logging.CRITICAL)


class OcamlDemanglerTestSuite(unittest.TestCase):
    """Decoding of OCaml native symbol names"""

    def test_separator(self):
        self.assertEqual(decode(b"caml__"), b".")
        self.assertEqual(decode(b"camlFoo__Bar__baz"), b"Foo.Bar.baz")

    def test_suffix_trim(self):
        self.assertEqual(decode(b"camlFoo__Bar_42"), b"Foo.Bar")
        self.assertEqual(decode(b"camlFoo_42"), b"Foo")
        self.assertEqual(decode(b"camlFoo42"), b"Foo42")
        # only the last "_digits" run goes
        self.assertEqual(decode(b"camlFoo_1_2"), b"Foo_1")

    def test_suffix_trim_all_digits(self):
        self.assertEqual(decode(b"caml12345"), b"12345")
        self.assertEqual(decode(b"caml7"), b"7")

    def test_suffix_trim_leading_underscore(self):
        self.assertEqual(decode(b"caml_42"), b"")

    def test_suffix_after_separator(self):
        # "__12" becomes ".12", a dot is not an underscore
        self.assertEqual(decode(b"camlFoo__12"), b"Foo.12")
        # "___12" is "__" + "_12"
        self.assertEqual(decode(b"camlFoo___12"), b"Foo.")

    def test_escape_every_byte(self):
        for value in range(256):
            for hex_digits in ("%02x" % value, "%02X" % value):
                mangled = ("caml$" + hex_digits).encode("ascii")
                self.assertEqual(decode(mangled), bytes([value]))

    def test_escape_invalid_hex(self):
        self.assertEqual(decode(b"caml$gg"), b"$gg")
        self.assertEqual(decode(b"caml$4g"), b"$4g")
        # the byte following a literal "$" is processed on its own
        self.assertEqual(decode(b"caml$$41"), b"$A")

    def test_escape_at_end_of_input(self):
        self.assertEqual(decode(b"camlFoo$4"), b"Foo$4")
        self.assertEqual(decode(b"camlFoo$"), b"Foo$")

    def test_lone_underscore(self):
        self.assertEqual(decode(b"caml_Foo_bar"), b"_Foo_bar")
        self.assertEqual(decode(b"camlFoo_"), b"Foo_")

    def test_precedence(self):
        # "__" wins over a following escape, no backtracking
        self.assertEqual(decode(b"caml___x"), b"._x")
        self.assertEqual(decode(b"caml___41"), b".")
        self.assertEqual(decode(b"caml$5f_"), b"__")
        self.assertEqual(decode(b"camlFoo$5f$5fBar"), b"Foo__Bar")

    def test_prefix_is_not_checked(self):
        self.assertEqual(decode(b"XXXXFoo__bar"), b"Foo.bar")

    def test_passthrough(self):
        body = string.ascii_letters.encode("ascii") + b"'-"
        self.assertEqual(decode(b"caml" + body), body)

    def test_output_never_longer_than_body(self):
        samples = [b"caml$41$42", b"caml____", b"camlA_B_C", b"caml$zz__1", b"camlFoo__Bar_42"]
        for mangled in samples:
            self.assertLessEqual(len(decode(mangled)), len(mangled) - 4)

    def test_accepts_bytes_like(self):
        self.assertEqual(decode(bytearray(b"camlFoo__bar")), b"Foo.bar")
        self.assertEqual(decode(memoryview(b"camlFoo__bar")), b"Foo.bar")
        with self.assertRaises(TypeError):
            decode("camlFoo__bar")

    def test_input_too_short(self):
        for mangled in (b"", b"c", b"cam", b"caml"):
            with self.assertRaises(InputTooShort):
                decode(mangled)
        try:
            decode(b"caml")
        except InputTooShort as exc:
            self.assertEqual(exc.given_str, b"caml")
            self.assertIn("minimum", str(exc))

    def test_empty_body(self):
        demangler = OcamlDemangler()
        self.assertEqual(demangler.decode_body(b"caml", 4), b"")
        self.assertEqual(demangler.trim_suffix(b""), b"")

    def test_is_ocaml_symbol(self):
        self.assertTrue(is_ocaml_symbol("camlFoo__bar_1"))
        self.assertTrue(is_ocaml_symbol("_camlFoo__bar_1"))
        self.assertTrue(is_ocaml_symbol("camlFoo"))
        self.assertFalse(is_ocaml_symbol("caml_alloc"))
        self.assertFalse(is_ocaml_symbol("_caml_startup"))
        self.assertFalse(is_ocaml_symbol("caml"))
        self.assertFalse(is_ocaml_symbol("_caml"))
        self.assertFalse(is_ocaml_symbol("main"))
        self.assertFalse(is_ocaml_symbol("_ZN3foo3barE"))

    def test_strip_symbol_prefix(self):
        self.assertEqual(strip_symbol_prefix("_camlFoo"), "camlFoo")
        self.assertEqual(strip_symbol_prefix("camlFoo"), "camlFoo")
        self.assertEqual(strip_symbol_prefix("__camlFoo"), "__camlFoo")

    def test_demangle(self):
        self.assertEqual(demangle("camlStdlib__List__map_123"), "Stdlib.List.map")
        self.assertEqual(demangle("_camlFoo__bar_7"), "Foo.bar")
        self.assertEqual(demangle("camlDune__exe__Main__entry"), "Dune.exe.Main.entry")
        self.assertEqual(demangle("camlFoo__$2a$2a_99"), "Foo.**")

    def test_demangle_utf8_escapes(self):
        self.assertEqual(demangle("camlFoo$e2$80$99"), "Foo’")
        self.assertEqual(demangle("camlFoo$ff"), "Foo\\xff")

    def test_demangle_bytes(self):
        self.assertEqual(demangle_bytes(b"camlStdlib__List__map_123"), b"Stdlib.List.map")
        with self.assertRaises(InputTooShort):
            demangle_bytes(b"caml")

    def test_demangle_unencodable_name(self):
        with self.assertRaises(OcamlDemangleError):
            demangle("camlFoo\ud800")
        # lone low surrogates are byte escapes and pass through
        self.assertEqual(demangle("camlFoo\udcff"), "Foo\\xff")

    def test_demangle_wrong_scheme(self):
        with self.assertRaises(SchemeNotFoundError):
            demangle("main")
        with self.assertRaises(SchemeNotFoundError):
            demangle("caml_alloc")
        try:
            demangle("main")
        except SchemeNotFoundError as exc:
            self.assertEqual(str(exc), "[main] Not an OCaml mangled name (missing 'caml' prefix)")


if __name__ == "__main__":
    unittest.main()
