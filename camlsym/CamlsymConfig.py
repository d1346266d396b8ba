import logging


class CamlsymConfig(object):

    # note to self: always change this in setup.py as well!
    VERSION = "1.0.0"

    ### CLI log output
    LOG_LEVEL = logging.INFO
    LOG_FORMAT = "%(asctime)-15s: %(name)-32s - %(message)s"

    ### symbol provider
    # only collect symbols from binaries that carry OCaml runtime strings
    OCAML_REQUIRE_RUNTIME_SIGNATURE = False
    # byte sequences the OCaml native runtime leaves in every linked executable
    OCAML_RUNTIME_SIGNATURES = [b"caml_startup", b"caml_program", b"OCAMLRUNPARAM", b"CAMLRUNPARAM"]
