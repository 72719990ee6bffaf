"""HTTP service exposing the calculator using FastAPI."""

import logging
from typing import List, Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from . import __version__
from .calculator import RenderStyle, parse_annotate_flag, render_computation
from .engine import EngineLimits, compute
from .errors import LongMultiplicationError

logger = logging.getLogger(__name__)


class MultiplicationRequest(BaseModel):
    """Request model for a multiplication."""
    multiplier: str = Field(..., description="Decimal digits of the multiplier (b)")
    multiplicand: str = Field(..., description="Decimal digits of the multiplicand (a)")
    annotate: bool = Field(default=False, description="Append explanatory labels")
    style: RenderStyle = Field(default=RenderStyle.STEPS, description="Layout style")


class RowModel(BaseModel):
    """One multiplier digit's partial computation."""
    index: int
    digit: int
    units_total: str
    carry_total: str
    row_sum: str
    partial_product: str


class MultiplicationResponse(BaseModel):
    """Response model with the computation and its rendering."""
    multiplier: str
    multiplicand: str
    rows: List[RowModel]
    result: str
    text: str


def create_app(limits: Optional[EngineLimits] = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        limits: Engine limits applied to every request

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Long Multiplication Service",
        description="Step-by-step long multiplication rendered as plain text",
        version=__version__,
    )
    app.state.limits = limits or EngineLimits()

    @app.exception_handler(LongMultiplicationError)
    async def invalid_input_handler(request: Request, exc: LongMultiplicationError):
        logger.warning(f"Rejected {request.url.path}: {exc}")
        return PlainTextResponse(f"Error: {exc}\n", status_code=400)

    @app.get("/")
    async def root():
        """Root endpoint with service information."""
        return {
            "service": "Long Multiplication Service",
            "version": __version__,
            "styles": [style.value for style in RenderStyle],
            "endpoints": ["/multiply", "/health"],
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "long-multiplication"}

    @app.get("/multiply", response_class=PlainTextResponse)
    def multiply_text(
        multiplier: str,
        multiplicand: str,
        annotate: str = "no",
        style: str = RenderStyle.STEPS.value,
    ):
        """Return the rendered block as plain text.

        ``annotate`` follows the command line convention: only a value
        starting with ``n`` turns the labels off.
        """
        try:
            render_style = RenderStyle(style)
        except ValueError:
            raise HTTPException(status_code=400, detail=f"Unknown style '{style}'")

        computation = compute(multiplier, multiplicand, app.state.limits)
        return render_computation(computation, parse_annotate_flag(annotate), render_style)

    @app.post("/multiply", response_model=MultiplicationResponse)
    def multiply_json(request: MultiplicationRequest):
        """Return the rows, the result and the rendered block as JSON."""
        computation = compute(request.multiplier, request.multiplicand, app.state.limits)
        data = computation.to_dict()
        return MultiplicationResponse(
            multiplier=data["multiplier"],
            multiplicand=data["multiplicand"],
            rows=[
                RowModel(
                    index=row["index"],
                    digit=row["digit"],
                    units_total=str(row["units_total"]),
                    carry_total=str(row["carry_total"]),
                    row_sum=str(row["row_sum"]),
                    partial_product=row["partial_product"],
                )
                for row in data["rows"]
            ],
            result=data["result"],
            text=render_computation(computation, request.annotate, request.style),
        )

    return app


app = create_app()


def run_server(host: str = "127.0.0.1", port: int = 8000, limits: Optional[EngineLimits] = None):
    """Run the FastAPI server."""
    logger.info(f"Starting long multiplication service on {host}:{port}")
    uvicorn.run(create_app(limits), host=host, port=port)


if __name__ == "__main__":
    run_server()
