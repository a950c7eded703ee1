"""External collaborators: the HTTP gateway to the GetTranslated server."""

from gettranslated.integrations.gateway import NetworkGateway

__all__ = ["NetworkGateway"]
