import uvicorn
import time
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware
from app.api.routes import orders, webhooks
from app.core.config import settings

# Configure logging with more detail
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] [%(name)s] %(message)s',  # Include module name in logs
    datefmt='%Y-%m-%d %H:%M:%S',
    handlers=[
        logging.StreamHandler(),  # Log to console
        logging.FileHandler(settings.LOG_FILE)  # Also log to file
    ]
)

# Set specific log levels for different modules
logging.getLogger("orders").setLevel(logging.INFO)
logging.getLogger("webhooks").setLevel(logging.INFO)
logging.getLogger("storage").setLevel(logging.INFO)
logging.getLogger("checkout").setLevel(logging.INFO)

logger = logging.getLogger("api")
logger.info("Application starting up...")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        path = request.url.path
        method = request.method

        # Log the incoming request
        logger.info(f"Received {method} request for {path}")

        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.time() - start_time
            logger.exception(f"Error after {duration:.2f}s for {method} request to {path}: {str(e)}")

            return JSONResponse(
                status_code=500,
                content={"success": False, "error": f"An internal server error occurred: {str(e)}"}
            )

        # Log the completed request
        duration = time.time() - start_time
        logger.info(f"Completed {method} request for {path} with {response.status_code} in {duration:.2f}s")
        return response


app = FastAPI(
    title="BiTS Paid Print API",
    description="Upload a PDF, pay online and collect the print with a pickup code",
    version="1.0.0"
)

app.add_middleware(RequestLoggingMiddleware)

# Configure CORS - Important for the kiosk frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(orders.router, tags=["Orders"])
app.include_router(webhooks.router, prefix="/webhook", tags=["Webhooks"])


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "BiTS Paid Print Server ✅"


if __name__ == "__main__":
    logger.info(f"Server running on port {settings.PORT}")
    uvicorn.run("main:app", host="0.0.0.0", port=settings.PORT)
