"""
Fake OpenAI-compatible model provider for exercising the analysis service
without an API key.

Serves POST /v1/chat/completions. The reply style is picked per request by
the FAKE_MODEL_MODE env var:
  json     well-formed JSON reply (default)
  prose    JSON wrapped in chatty text
  garbage  prose only, no JSON at all
  error    HTTP 500 with an OpenAI-style error body

Usage:
    python -m ecoscan.scripts.fake_model_server                (terminal 1)
    OPENAI_API_URL=http://127.0.0.1:9000/v1/chat/completions \
    OPENAI_API_KEY=fake python -m ecoscan.services.api         (terminal 2)
"""

import json
import os
import time
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

app = FastAPI(title="fake-model-server")

_REPLY = {
    "objectName": "Aluminum Soda Can",
    "classification": "recyclable",
    "confidence": 93,
    "materials": ["Aluminum", "Polymer Lining"],
    "environmentalImpact": {
        "carbonFootprint": "Medium",
        "recyclability": "Very High",
        "biodegradability": "Very Low",
    },
    "disposalTips": ["Empty and rinse", "Place in metals recycling"],
    "reuseSuggestions": ["Pencil holder", "Herb planter"],
    "educationalFacts": ["Aluminum can be recycled indefinitely"],
}


def _content(mode: str) -> str:
    if mode == "prose":
        return "Here is what I found:\n```json\n" + json.dumps(_REPLY, indent=2) + "\n```\nHope that helps!"
    if mode == "garbage":
        return "This looks like some kind of metal container, probably a drink can, but I can't be sure."
    return json.dumps(_REPLY)


@app.post("/v1/chat/completions")
async def chat_completions(request: Request):
    body = await request.json()
    mode = os.getenv("FAKE_MODEL_MODE", "json")
    n_msgs = len(body.get("messages", []))
    print(f"[model] {body.get('model')} messages={n_msgs} max_tokens={body.get('max_tokens')} mode={mode}")
    time.sleep(0.3)
    if mode == "error":
        return JSONResponse(status_code=500, content={"error": {"message": "fake provider outage"}})
    return {
        "id": "chatcmpl-fake",
        "object": "chat.completion",
        "choices": [
            {"index": 0, "message": {"role": "assistant", "content": _content(mode)}, "finish_reason": "stop"}
        ],
    }


if __name__ == "__main__":
    print("Fake model server starting on http://localhost:9000")
    uvicorn.run(app, host="0.0.0.0", port=9000)
