from camlsym.common.labelprovider.ocaml_demangler import (
    InputTooShort,
    OcamlDemangleError,
    SchemeNotFoundError,
    decode,
    demangle,
    demangle_bytes,
    is_ocaml_symbol,
)
