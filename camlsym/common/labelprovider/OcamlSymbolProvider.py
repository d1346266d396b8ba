#!/usr/bin/python

import logging

import lief

from camlsym.CamlsymConfig import CamlsymConfig

from .AbstractLabelProvider import AbstractLabelProvider
from .ocaml_demangler import demangle, is_ocaml_symbol

lief.logging.disable()
LOGGER = logging.getLogger(__name__)

MACHO_MAGICS = (b"\xfe\xed\xfa\xce", b"\xfe\xed\xfa\xcf", b"\xce\xfa\xed\xfe", b"\xcf\xfa\xed\xfe")


class OcamlSymbolProvider(AbstractLabelProvider):
    """Minimal resolver for OCaml symbols"""

    def __init__(self, config):
        self._config = config
        # addr:func_name
        self._func_symbols = {}

    def isSymbolProvider(self):
        return True

    def isApiProvider(self):
        return False

    def getApi(self, to_address, api_address=None):
        return ("", "")

    def update(self, binary_info):
        self._func_symbols = {}
        data = self._get_binary_data(binary_info)
        if not data:
            return
        if self._config is not None and self._config.OCAML_REQUIRE_RUNTIME_SIGNATURE and not self._has_runtime_signature(data):
            LOGGER.debug("No OCaml runtime signature found, skipping symbol extraction.")
            return

        if data[:4] == b"\x7fELF":
            self._update_elf(data)
        elif data[:4] in MACHO_MAGICS:
            self._update_macho(data)
        elif data[:2] == b"MZ":
            self._update_pe(data)

    def is_ocaml_binary(self, binary_info):
        """Checks for strings the OCaml native runtime embeds in every executable."""
        data = self._get_binary_data(binary_info)
        if not data:
            return False
        return self._has_runtime_signature(data)

    def _has_runtime_signature(self, data):
        signatures = self._config.OCAML_RUNTIME_SIGNATURES if self._config is not None else CamlsymConfig.OCAML_RUNTIME_SIGNATURES
        return any(sig in data for sig in signatures)

    def _get_binary_data(self, binary_info):
        """Safely retrieves binary data from either raw_data or a file path."""
        data = binary_info.raw_data
        if not data and binary_info.file_path:
            try:
                with open(binary_info.file_path, "rb") as fin:
                    data = fin.read()
            except OSError as e:
                LOGGER.debug("Failed to read binary from path %s: %s", binary_info.file_path, e)
                return None
        return data

    def _parse_binary(self, data, format_name):
        try:
            lief_binary = lief.parse(data)
        except Exception as exc:
            LOGGER.debug("Failed to parse %s binary with LIEF: %s", format_name, type(exc).__name__)
            return None
        if not lief_binary:
            LOGGER.debug("LIEF did not recognize the %s binary.", format_name)
        return lief_binary

    def _update_elf(self, data):
        lief_binary = self._parse_binary(data, "ELF")
        if not lief_binary:
            return
        self._func_symbols.update(self._parse_lief_symbols(lief_binary.symtab_symbols))
        self._func_symbols.update(self._parse_lief_symbols(lief_binary.dynamic_symbols))

    def _update_macho(self, data):
        lief_binary = self._parse_binary(data, "Mach-O")
        if not lief_binary:
            return
        self._func_symbols.update(self._parse_macho_symbols(lief_binary))

    def _update_pe(self, data):
        lief_binary = self._parse_binary(data, "PE")
        if not lief_binary:
            return
        self._func_symbols.update(self._parse_pe_exports(lief_binary))
        for address, name in self._parse_coff_symbols(lief_binary).items():
            if address not in self._func_symbols:
                self._func_symbols[address] = name

    def _parse_pe_exports(self, lief_binary):
        function_symbols = {}
        for function in lief_binary.exported_functions:
            demangled = self._demangle(function.name)
            if demangled:
                function_symbols[lief_binary.imagebase + function.address] = demangled
        return function_symbols

    def _parse_coff_symbols(self, lief_binary):
        function_symbols = {}
        code_base_address = None
        for section in lief_binary.sections:
            # IMAGE_SCN_MEM_EXECUTE
            if section.characteristics & 0x20000000:
                code_base_address = lief_binary.imagebase + section.virtual_address
                break
        if code_base_address is None:
            return function_symbols
        for symbol in lief_binary.symbols:
            if hasattr(symbol.complex_type, "name") and symbol.complex_type.name == "FUNCTION":
                # 32bit COFF prepends an underscore, same as Mach-O
                demangled = self._demangle(symbol.name)
                if demangled:
                    function_symbols[code_base_address + symbol.value] = demangled
        return function_symbols

    def _parse_macho_symbols(self, lief_binary):
        # nlist entries carry no function type, only symbols inside code sections are taken
        function_symbols = {}
        for symbol in lief_binary.symbols:
            if symbol is None or symbol.value == 0:
                continue
            if not self._is_macho_code_address(lief_binary, symbol.value):
                continue
            demangled = self._demangle(symbol.name)
            if demangled:
                function_symbols[symbol.value] = demangled
        return function_symbols

    def _is_macho_code_address(self, lief_binary, address):
        section = lief_binary.section_from_virtual_address(address)
        if section is None:
            return False
        # S_ATTR_PURE_INSTRUCTIONS | S_ATTR_SOME_INSTRUCTIONS
        return section.name == "__text" or bool(int(section.flags) & 0x80000400)

    def _parse_lief_symbols(self, symbols):
        function_symbols = {}
        for symbol in symbols:
            if symbol is not None and symbol.is_function and symbol.value != 0:
                demangled = self._demangle(symbol.name)
                if demangled:
                    function_symbols[symbol.value] = demangled
        return function_symbols

    def _demangle(self, raw_name):
        if not is_ocaml_symbol(raw_name):
            return ""
        try:
            return demangle(raw_name)
        except Exception as exc:
            LOGGER.debug("Failed to demangle OCaml symbol %s: %s", raw_name, exc)
        return ""

    def getSymbol(self, address):
        return self._func_symbols.get(address, "")

    def getFunctionSymbols(self):
        return self._func_symbols
