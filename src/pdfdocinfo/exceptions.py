# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Custom exceptions for pdfdocinfo."""


class PDFDocInfoError(Exception):
    """Base exception for all pdfdocinfo errors."""


class DocumentOpenError(PDFDocInfoError):
    """PDF file could not be opened."""


class PasswordError(DocumentOpenError):
    """PDF is encrypted and the supplied password was rejected."""


class ConfigurationError(PDFDocInfoError):
    """Invalid configuration value (e.g. unknown text encoding)."""
