# web_app/api.py
"""
FastAPI endpoints for scene generation and validation.

- POST /scenes/generate: synthesize (or fetch from the configured scene service) a scene
- POST /scenes/validate: validate a scene document, 422 with every problem found
- GET  /: status
"""
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Body
from pydantic import BaseModel

from stickman.config import load_settings
from stickman.errors import SceneError
from stickman.log import configure_logging
from stickman.remote import generate_scene_from_prompt
from stickman.validator import check_scene

settings = load_settings()
configure_logging(settings.log_level)

app = FastAPI(title="Stickman Scene API")

class GenerateRequest(BaseModel):
    text: str
    seed: Optional[int] = None

@app.post("/scenes/generate", response_model=Dict[str, Any])
def generate_scene(req: GenerateRequest):
    try:
        scene = generate_scene_from_prompt(req.text, req.seed, settings)
    except SceneError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return {"text": req.text, "seed": req.seed, "scene": scene.to_dict()}

@app.post("/scenes/validate")
def validate_scene(document: Any = Body(...)):
    ok, scene, errors = check_scene(document)
    if not ok:
        raise HTTPException(status_code=422, detail={"errors": errors})
    return {"ok": True, "frames": scene.frame_count, "catalog": sorted(scene.catalog)}

@app.get("/")
def root():
    return {"status": "ok", "endpoints": ["/scenes/generate (POST)", "/scenes/validate (POST)"]}
