import argparse
import logging
import os
import sys

from camlsym.CamlsymConfig import CamlsymConfig
from camlsym.common.BinaryInfo import BinaryInfo
from camlsym.common.labelprovider.OcamlSymbolProvider import OcamlSymbolProvider
from camlsym.common.labelprovider.ocaml_demangler import InputTooShort, decode, demangle, is_ocaml_symbol


def demangleLine(line, raw=False):
    """ demangle a single symbol, echo it unchanged if it is not an OCaml name """
    symbol = line.strip()
    if raw:
        try:
            decoded = decode(symbol.encode("utf-8", "surrogateescape"))
        except InputTooShort as exc:
            logging.debug("Skipping short input: %s", symbol)
            return str(exc)
        return decoded.decode("utf-8", "backslashreplace")
    if is_ocaml_symbol(symbol):
        return demangle(symbol)
    return symbol


def listFunctionSymbols(file_path, config):
    binary_info = BinaryInfo.fromFile(file_path)
    provider = OcamlSymbolProvider(config)
    if not provider.is_ocaml_binary(binary_info):
        logging.warning("%s does not contain OCaml runtime signatures.", file_path)
    provider.update(binary_info)
    symbols = provider.getFunctionSymbols()
    logging.info("Found %d OCaml function symbols in %s", len(symbols), file_path)
    return ["0x%08x: %s" % (address, symbols[address]) for address in sorted(symbols)]


def buildArgumentParser():
    parser = argparse.ArgumentParser(description='Demangle OCaml native symbol names, either given directly, via stdin, or taken from a binary.')
    parser.add_argument('-f', '--file', type=str, default='', help='List the demangled OCaml function symbols of the given ELF/Mach-O/PE file.')
    parser.add_argument('-r', '--raw', action='store_true', default=False, help='Decode without checking for the "caml" prefix, its first 4 characters are skipped unconditionally.')
    parser.add_argument('-s', '--require_signature', action='store_true', default=False, help='Only list symbols of binaries containing OCaml runtime strings.')
    parser.add_argument('-v', '--verbose', action='store_true', default=False, help='Enable debug logging.')
    parser.add_argument('--version', action='version', version='camlsym ' + CamlsymConfig.VERSION)
    parser.add_argument('symbols', type=str, nargs='*', help='Mangled symbols to demangle, read from stdin if none are given.')
    return parser


if __name__ == "__main__":
    PARSER = buildArgumentParser()
    ARGS = PARSER.parse_args()

    config = CamlsymConfig()
    if ARGS.verbose:
        config.LOG_LEVEL = logging.DEBUG
    if ARGS.require_signature:
        config.OCAML_REQUIRE_RUNTIME_SIGNATURE = True
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)

    if ARGS.file:
        if not os.path.isfile(ARGS.file):
            PARSER.print_help()
            sys.exit(1)
        for entry in listFunctionSymbols(ARGS.file, config):
            print(entry)
    elif ARGS.symbols:
        for SYMBOL in ARGS.symbols:
            print(demangleLine(SYMBOL, raw=ARGS.raw))
    elif not sys.stdin.isatty():
        for LINE in sys.stdin:
            if LINE.strip():
                print(demangleLine(LINE, raw=ARGS.raw))
    else:
        PARSER.print_help()
        sys.exit(1)
