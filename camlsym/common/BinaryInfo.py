import hashlib
import os


class BinaryInfo(object):
    """ simple DTO to contain most information related to the binary whose symbols are demangled """

    binary = b""
    raw_data = b""
    binary_size = 0
    file_path = ""
    sha256 = ""
    sha1 = ""
    md5 = ""

    def __init__(self, binary):
        self.binary = binary
        self.raw_data = binary
        self.binary_size = len(binary)
        self.sha256 = hashlib.sha256(binary).hexdigest()
        self.sha1 = hashlib.sha1(binary).hexdigest()
        self.md5 = hashlib.md5(binary).hexdigest()

    @classmethod
    def fromFile(cls, file_path):
        with open(file_path, "rb") as fin:
            binary_info = cls(fin.read())
        binary_info.file_path = os.path.abspath(file_path)
        return binary_info
