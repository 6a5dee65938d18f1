"""Vercel serverless entrypoint for the face-reading proxy.

``vercel.json`` rewrites ``/api/proxy-gemini-api`` here and the Vercel Python
runtime serves the ASGI ``app`` below. Running this file directly starts the
same app with uvicorn for local development.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request, Response
from fastapi.concurrency import run_in_threadpool

# Ensure project root is on the path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from core.proxy import ProxyService

load_dotenv()
logging.basicConfig(level=logging.INFO)

# Fails at startup when no API key is configured.
service = ProxyService.from_env()

app = FastAPI(title="AI physiognomy proxy")

# Everything but POST and OPTIONS is answered with 405 by ProxyService.handle.
PROXY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def get_service() -> ProxyService:
    return service


@app.api_route("/api/proxy-gemini-api", methods=PROXY_METHODS)
@app.api_route("/api/index", methods=PROXY_METHODS)
async def proxy_gemini_api(request: Request, proxy: ProxyService = Depends(get_service)) -> Response:
    body = await request.body() if request.method == "POST" else None
    result = await run_in_threadpool(proxy.handle, request.method, body)
    return Response(content=result.body, status_code=result.status, headers=result.headers)


# If run directly for local dev
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", 3000)))
