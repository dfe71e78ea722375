class PdfMergerError(Exception):
    pass


class ValidationError(PdfMergerError):
    pass


class InvalidDocumentError(PdfMergerError):
    pass


class ParsingError(InvalidDocumentError):
    pass


class EmptyInputError(PdfMergerError):
    pass
