"""
Floreria Backend — Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception carries a client-facing message and an optional context
       dict. Global handlers (registered in main.py) turn them into
       {ok: false, data: null, error: <message>} envelopes with the right
       HTTP status code.
Who:   Raised by services and routes; caught by the global handlers.

Exception Hierarchy:
    FloreriaError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── NotFoundError            → 404 Not Found (unknown id)
    ├── RouteNotFoundError       → 404 Not Found (no method/path match)
    ├── DatabaseError            → 500 Internal Server Error
    └── FileStorageError         → 500 Internal Server Error
        └── ImageWriteError      → 500 on create, degraded on update

Messages are Spanish because they are shown as-is by the mobile client.
"""

from typing import Any, Dict, List, Optional


class FloreriaError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (returned in the envelope)
        context:  Additional debug info (logged, never returned to the client)
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "Error interno del servidor",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(FloreriaError):
    """
    Raised when client input fails validation.

    When:    Missing or blank required fields, negative amounts, a PUT body
             with nothing to update.
    HTTP:    400 Bad Request
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Datos inválidos",
        fields: Optional[List[str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if fields:
            ctx["fields"] = list(fields)
        super().__init__(message=message, context=ctx)
        self.fields = list(fields or [])


class NotFoundError(FloreriaError):
    """
    Raised when a record id does not exist.

    When:    GET/PUT/DELETE /ramos/{id} or /pedidos/{id} with an unknown id.
    HTTP:    404 Not Found

    The message reads "<Resource> no encontrado", e.g. "Ramo no encontrado".
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "Recurso",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} no encontrado", context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class RouteNotFoundError(FloreriaError):
    """No route matches the method and normalized path."""

    status_code = 404

    def __init__(self, path: str, method: Optional[str] = None):
        super().__init__(
            message=f"Ruta no encontrada: {path}",
            context={"path": path, "method": method},
        )
        self.path = path


class DatabaseError(FloreriaError):
    """
    Raised when the relational store rejects a statement.

    When:    Connection lost, constraint violation, commit failure.
    HTTP:    500 Internal Server Error

    The driver error is kept in `context` for the server log; the client only
    sees the operation that failed ("Error al crear ramo").
    """

    def __init__(
        self,
        message: str = "Error de base de datos",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class FileStorageError(FloreriaError):
    """
    Raised when a file system operation on the image store fails.

    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "Error al guardar el archivo",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ImageWriteError(FileStorageError):
    """
    An image payload could not be decoded or written.

    Fatal only on create (the ramo is not inserted). On update the service
    keeps the previous image instead of raising.
    """

    def __init__(
        self,
        message: str = "No se pudo guardar la imagen",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
