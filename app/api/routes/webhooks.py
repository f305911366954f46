import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool
from app.api.deps import get_order_workflow
from app.services.order_workflow import OrderWorkflow

logger = logging.getLogger("webhooks")

router = APIRouter()


@router.post("/yoco")
async def yoco_webhook(
    request: Request,
    workflow: OrderWorkflow = Depends(get_order_workflow)
):
    """
    Handle Yoco payment events.

    Events are not signature-checked: anyone who knows a checkout id can
    mark its order paid.
    """
    try:
        event = await request.json()
    except ValueError:
        logger.warning("Yoco webhook with a non-JSON body")
        event = {}

    result = await run_in_threadpool(workflow.confirm_payment, event)
    return PlainTextResponse(result.message, status_code=result.status_code)
