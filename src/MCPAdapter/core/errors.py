class ToolAdapterError(Exception):
    """Base class for failures raised while converting or decoding MCP tools."""


class SchemaConversionError(ToolAdapterError):
    """A JSON schema could not be turned into a pydantic model."""


class ExecutionFailed(ToolAdapterError):
    """The MCP server flagged the call result as an error."""


class EmptyResult(ToolAdapterError):
    """The call result carried no content parts."""


class UnsupportedResource(ToolAdapterError):
    """An embedded resource had neither text nor blob."""

    def __init__(self, resource_type):
        self.resource_type = resource_type
        super().__init__(f"Unexpected resource type: {resource_type}")


class UnsupportedContentType(ToolAdapterError):
    """A content part carried a type tag the decoder does not know."""

    def __init__(self, content_type):
        self.content_type = content_type
        super().__init__(f"Unexpected content type: {content_type}")


class MalformedContent(ToolAdapterError):
    """A content part lacks the field its type tag requires."""

    def __init__(self, content_type, field):
        self.content_type = content_type
        self.field = field
        super().__init__(f"Content part of type {content_type!r} has no {field!r}")
