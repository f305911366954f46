import logging
from typing import Optional
from fastapi import APIRouter, Depends, UploadFile, File, Form, status
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from app.api.deps import get_order_workflow
from app.core.errors import OrderValidationError, OrderWorkflowError
from app.services.order_workflow import OrderWorkflow

# Configure logger
logger = logging.getLogger("orders")

router = APIRouter()


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message}
    )


@router.post("/test")
async def test_route():
    logger.info("/test route hit")
    return {"ok": True}


@router.post("/create-order-test")
async def create_order_test():
    logger.info("/create-order-test hit")
    return {"reached": True}


@router.post("/create-order", summary="Create a print order and start checkout")
async def create_order(
    file: Optional[UploadFile] = File(None),
    color_mode: Optional[str] = Form(None),
    copies: Optional[str] = Form(None),
    workflow: OrderWorkflow = Depends(get_order_workflow)
):
    """
    Create a print order.

    This endpoint:
    1. Validates the upload (PDF only, bw/color, copies >= 1)
    2. Counts pages and prices the job
    3. Stores the file and inserts the order as pending_payment
    4. Creates a Yoco checkout and returns its payUrl
    """
    logger.info("/create-order hit")

    file_content = None
    file_name = None
    if file is not None:
        file_name = file.filename
        file_content = await file.read()

    try:
        # Storage, database and checkout calls are blocking
        return await run_in_threadpool(
            workflow.create_order,
            file_content,
            file_name,
            color_mode,
            copies
        )
    except OrderValidationError as e:
        logger.warning(f"Rejected order upload {file_name}: {e.message}")
        return error_response(e.status_code, e.message)
    except OrderWorkflowError as e:
        logger.error(f"create-order failed at {e.step}: {e.message}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, e.message)


@router.get("/orders/{code}", summary="Look up a print order by pickup code")
async def get_order(
    code: str,
    workflow: OrderWorkflow = Depends(get_order_workflow)
):
    try:
        order = await run_in_threadpool(workflow.get_order_status, code)
    except OrderWorkflowError as e:
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, e.message)

    if not order:
        return error_response(status.HTTP_404_NOT_FOUND, f"Order {code} not found")
    return order
