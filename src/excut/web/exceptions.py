"""Custom exceptions and error handlers for the REST API."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from excut.domain import InvalidConfiguration, InvalidInput


class UnsupportedPolicyError(Exception):
    """Raised when the requested bin selection policy is not registered."""

    def __init__(self, policy: str, available: list[str]) -> None:
        self.policy = policy
        self.available = available
        super().__init__(
            f"Unsupported policy: {policy}. Available: {', '.join(available)}"
        )


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with the FastAPI app."""

    @app.exception_handler(InvalidConfiguration)
    async def invalid_configuration_handler(
        request: Request, exc: InvalidConfiguration
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": str(exc),
                "error_type": "configuration",
                "details": {"field": exc.field},
            },
        )

    @app.exception_handler(InvalidInput)
    async def invalid_input_handler(
        request: Request, exc: InvalidInput
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": str(exc),
                "error_type": "input",
                "details": {"row": exc.row},
            },
        )

    @app.exception_handler(UnsupportedPolicyError)
    async def unsupported_policy_handler(
        request: Request, exc: UnsupportedPolicyError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={
                "error": str(exc),
                "error_type": "unsupported_policy",
                "details": {"policy": exc.policy, "available": exc.available},
            },
        )
