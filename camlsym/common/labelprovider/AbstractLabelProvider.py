#!/usr/bin/python

from abc import abstractmethod


class AbstractLabelProvider:

    def __init__(self, config):
        raise NotImplementedError

    @abstractmethod
    def update(self, binary_info):
        """Parse the binary described by binary_info and (re)populate the provider's address:label map"""
        raise NotImplementedError

    @abstractmethod
    def getApi(self, to_address, api_address=None):
        """If the LabelProvider knows which API is called at the given address, return (dll, api), else ("", "")"""
        raise NotImplementedError

    @abstractmethod
    def getSymbol(self, address):
        """Return the demangled symbol for the given address, or an empty string if there is none"""
        raise NotImplementedError

    @abstractmethod
    def isApiProvider(self):
        """Returns whether getApi(..) of the LabelProvider is functional"""
        return False

    @abstractmethod
    def isSymbolProvider(self):
        """Returns whether getSymbol(..) of the LabelProvider is functional"""
        return False

    @abstractmethod
    def getFunctionSymbols(self):
        """Return all function symbols as address:name"""
        return {}
