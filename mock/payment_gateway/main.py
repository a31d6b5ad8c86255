import uuid
from fastapi import FastAPI, Form, Header, HTTPException, Request

# In-memory stand-in for the hosted payment-intent API, for local runs and e2e tests.
# Intents are created as "succeeded" so the checkout flow can be walked end to end.
app = FastAPI(title="Mock Payment Gateway", version="1.0.0")
INTENTS: dict[str, dict] = {}


def _check_auth(authorization: str | None) -> None:
    if not authorization or not authorization.startswith("Bearer sk_test_"):
        raise HTTPException(status_code=401, detail="invalid api key")


@app.get("/health")
def health(): return {"status": "ok"}


@app.post("/v1/payment_intents")
async def create_intent(
    request: Request,
    amount: int = Form(...),
    currency: str = Form("gbp"),
    authorization: str | None = Header(None),
):
    _check_auth(authorization)
    if amount <= 0:
        raise HTTPException(status_code=400, detail="amount must be positive")

    form = await request.form()
    intent_id = f"pi_{uuid.uuid4().hex[:24]}"
    INTENTS[intent_id] = {
        "id": intent_id,
        "object": "payment_intent",
        "amount": amount,
        "currency": currency,
        "status": "succeeded",
        "client_secret": f"{intent_id}_secret_{uuid.uuid4().hex[:12]}",
        "metadata": {k[9:-1]: v for k, v in form.items() if k.startswith("metadata[")},
    }
    return INTENTS[intent_id]


@app.get("/v1/payment_intents/{intent_id}")
def get_intent(intent_id: str, authorization: str | None = Header(None)):
    _check_auth(authorization)
    if intent_id not in INTENTS:
        raise HTTPException(status_code=404, detail="no such payment_intent")
    return INTENTS[intent_id]
