import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from domain.exceptions.currency import AppError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
	@app.exception_handler(AppError)
	async def app_error_handler(request: Request, exc: AppError):
		logger.error(f'Request to {request.url.path} failed: {exc}')
		return JSONResponse(status_code=503, content={'detail': str(exc)})
