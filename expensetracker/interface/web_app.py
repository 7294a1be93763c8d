"""Mini README: FastAPI-powered expense page.

Structure:
    * create_application - application factory wiring routes and templates.
    * ExpenseUpdate - JSON body accepted when an edited row is committed.

The interface is a thin presentation surface: it renders the controller's
snapshot and forwards intents (submit, refresh, edit, save, cancel, commit,
delete) to it. Store failures are reported as HTTP 503 so the page can show
them instead of spinning forever.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel

from ..configuration import ExpenseTrackerSettings, get_settings
from ..expenses import ExpenseViewController
from ..logging_utils import configure_root_logger, get_logger
from ..models import ExpenseRecord, parse_expense_date
from ..store import ExpenseStoreGateway, StoreUnavailable, create_store_gateway

LOGGER = get_logger(__name__)


class ExpenseUpdate(BaseModel):
    """Fields of an edited grid row, as typed into its inputs."""

    date: str
    description: str
    amount: str


def create_application(
    gateway: Optional[ExpenseStoreGateway] = None,
    settings: Optional[ExpenseTrackerSettings] = None,
) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    settings = settings or get_settings()
    configure_root_logger(settings.log_level)
    gateway = gateway or create_store_gateway(settings)
    controller = ExpenseViewController(gateway)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        # Load the collection before the first page is served.
        try:
            await controller.refresh()
        except StoreUnavailable as error:
            LOGGER.warning("Starting without expenses, initial load failed: %s", error)
        yield

    app = FastAPI(title="Expense Tracker", version="0.1.0", lifespan=lifespan)
    app.state.controller = controller
    templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
    static_directory = Path(__file__).parent / "static"
    app.mount("/static", StaticFiles(directory=str(static_directory)), name="static")

    def state_response(status_code: int = 200) -> JSONResponse:
        return JSONResponse(controller.snapshot().as_dict(), status_code=status_code)

    def store_failure(error: StoreUnavailable) -> HTTPException:
        return HTTPException(status_code=503, detail=str(error))

    @app.get("/", response_class=HTMLResponse)
    async def dashboard(
        request: Request, page: int = 0, page_size: Optional[int] = None
    ) -> HTMLResponse:
        """Render the entry form and one page of the expense grid."""

        if page_size not in settings.page_size_options:
            page_size = settings.default_page_size
        state = controller.snapshot()
        page_count = max(1, -(-len(state.expenses) // page_size))
        page = min(max(page, 0), page_count - 1)
        rows = state.expenses[page * page_size : (page + 1) * page_size]
        LOGGER.debug("Rendering page %s/%s with %s rows", page + 1, page_count, len(rows))
        return templates.TemplateResponse(
            request,
            "dashboard.html",
            {
                "rows": rows,
                "row_modes": state.row_modes,
                "busy": state.busy,
                "last_error": state.last_error,
                "invalid_fields": state.invalid_fields,
                "page": page,
                "page_count": page_count,
                "page_size": page_size,
                "page_size_options": settings.page_size_options,
                "total": len(state.expenses),
                "backend": gateway.metadata(),
            },
        )

    @app.get("/state")
    async def current_state() -> JSONResponse:
        """Return the controller snapshot."""

        return state_response()

    @app.post("/refresh")
    async def refresh() -> JSONResponse:
        """Re-read the whole collection from the store."""

        try:
            await controller.refresh()
        except StoreUnavailable as error:
            raise store_failure(error) from error
        return state_response()

    @app.post("/expenses")
    async def submit_expense(
        date: str = Form(""),
        description: str = Form(""),
        amount: str = Form(""),
    ) -> JSONResponse:
        """Validate and store a new expense from the entry form."""

        try:
            validation = await controller.submit_new_expense(date, description, amount)
        except StoreUnavailable as error:
            raise store_failure(error) from error
        if not validation.is_valid:
            return JSONResponse(
                {"invalid_fields": list(validation.invalid_fields)}, status_code=422
            )
        return state_response(status_code=201)

    @app.post("/expenses/{expense_id}/{action}")
    async def change_row_mode(expense_id: str, action: str) -> JSONResponse:
        """Switch a grid row between view and edit modes."""

        handlers = {
            "edit": controller.begin_edit,
            "save": controller.save_edit,
            "cancel": controller.cancel_edit,
        }
        handler = handlers.get(action)
        if handler is None:
            raise HTTPException(status_code=404, detail=f"Unknown row action '{action}'")
        if not handler(expense_id):
            raise HTTPException(status_code=404, detail=f"Expense {expense_id} not found")
        return state_response()

    @app.put("/expenses/{expense_id}")
    async def commit_row(expense_id: str, payload: ExpenseUpdate) -> JSONResponse:
        """Persist an edited row."""

        try:
            record = ExpenseRecord(
                expense_id=expense_id,
                date=parse_expense_date(payload.date),
                description=payload.description,
                amount=payload.amount,
            )
        except ValueError as error:
            raise HTTPException(status_code=422, detail=str(error)) from error
        try:
            await controller.commit_row_edit(record)
        except ValueError as error:
            raise HTTPException(status_code=422, detail=str(error)) from error
        except StoreUnavailable as error:
            raise store_failure(error) from error
        return state_response()

    @app.delete("/expenses/{expense_id}")
    async def delete_expense(expense_id: str) -> JSONResponse:
        """Remove an expense."""

        try:
            await controller.delete_expense(expense_id)
        except StoreUnavailable as error:
            raise store_failure(error) from error
        return state_response()

    return app
