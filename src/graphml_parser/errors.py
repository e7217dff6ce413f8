"""Exceptions raised by the GraphML parser."""


class MalformedDocument(Exception):
    """Raised when markup cannot be structurally parsed at all.

    Only unparseable input is an error. Dangling edge endpoints, duplicate
    node ids, empty values and undeclared keys all produce a valid model.
    """

    def __init__(self, message: str, source_name: str = "<string>"):
        self.source_name = source_name
        super().__init__(message)
