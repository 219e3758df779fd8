import logging
import os

from dotenv import load_dotenv

load_dotenv(".env.local"); load_dotenv()  # also loads .env if present

from fastapi import FastAPI, Request, Response  # noqa: E402
from fastapi.concurrency import run_in_threadpool  # noqa: E402
from fastapi.responses import JSONResponse  # noqa: E402

from w4_prefill import W4_FILENAME, PaymentRequired, W4FormFiller, W4Request  # noqa: E402

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
logger = logging.getLogger(__name__)

app = FastAPI(title="TaxFlow W-4 Generator")

# Sent on every fill response, preflight included.
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}

# The route accepts every verb so the method gate below answers with our JSON shape.
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

w4_form_filler = W4FormFiller()


@app.get("/health")
def health():
    return {"ok": True}


# --- W-4 generation -----------------------------------------------------------


@app.api_route("/generate-w4", methods=ALL_METHODS)
async def generate_w4(request: Request):
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=CORS_HEADERS)

    if request.method != "POST":
        return JSONResponse({"error": "Method not allowed"}, status_code=405, headers=CORS_HEADERS)

    try:
        payload = W4Request.model_validate(await request.json())

        try:
            w4_form_filler.check_proof(payload.proof)
        except PaymentRequired as exc:
            body = {"error": str(exc)}
            if not payload.proof:
                body["message"] = "Please complete payment to generate your W-4"
            return JSONResponse(body, status_code=403, headers=CORS_HEADERS)

        pdf_bytes = await run_in_threadpool(
            w4_form_filler.generate, payload.user_data, payload.calc_results
        )
    except Exception as exc:
        logger.error("Error generating W-4: %s", exc, exc_info=True)
        return JSONResponse(
            {
                "error": str(exc) or "Failed to generate PDF",
                "hint": "Please try again or contact support",
            },
            status_code=500,
            headers=CORS_HEADERS,
        )

    headers = {
        **CORS_HEADERS,
        "Content-Disposition": f'attachment; filename="{W4_FILENAME}"',
    }
    return Response(content=pdf_bytes, media_type="application/pdf", headers=headers)
