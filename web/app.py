"""FastAPI web adapter for the CHIP-8 emulator."""

import base64
import binascii
import logging
import os
from pathlib import Path
from typing import Optional, Union

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from chip8 import run_program, RunOptions, LoadError
from chip8.keymap import key_to_button
from chip8.keypad import NUM_KEYS
from chip8.roms import MAX_ROM_SIZE, default_rom, list_roms, read_rom

logger = logging.getLogger(__name__)


# Constants
ROM_DIR = Path(os.environ.get("CHIP8_ROM_DIR", "roms"))


# Request/Response models
class KeyEventModel(BaseModel):
    frame: int = Field(ge=0)
    # Keypad index 0-15, or a host key name such as "q"
    key: Union[int, str]
    pressed: bool = True


class RunOptionsModel(BaseModel):
    frames: int = Field(default=60, ge=1, le=36000)
    ticks_per_frame: int = Field(default=5, ge=1, le=1000)
    key_events: list[KeyEventModel] = Field(default_factory=list)
    seed: Optional[int] = None
    render: bool = False
    render_scale: int = Field(default=1, ge=1, le=8)


class RunRequest(BaseModel):
    rom: Optional[str] = None  # base64
    rom_name: Optional[str] = None
    options: Optional[RunOptionsModel] = None


class RunResponse(BaseModel):
    status: str
    frames_executed: int
    steps_executed: int
    final_state: dict
    display: list[str]
    sound_active: bool
    screen: Optional[str] = None
    error: Optional[dict] = None


class RomListResponse(BaseModel):
    roms: list[str]


# Create FastAPI app
app = FastAPI(
    title="CHIP-8 Emulator",
    description="Web API for running CHIP-8 programs",
    version="0.1.0",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _resolve_key(key: Union[int, str]) -> int:
    if isinstance(key, int):
        if not 0 <= key < NUM_KEYS:
            raise HTTPException(status_code=400, detail=f"Key index out of range: {key}")
        return key
    button = key_to_button(key)
    if button is None:
        raise HTTPException(status_code=400, detail=f"Unmapped key: {key}")
    return button


def _load_rom(request: RunRequest) -> bytes:
    if request.rom is not None:
        try:
            data = base64.b64decode(request.rom, validate=True)
        except (binascii.Error, ValueError):
            raise HTTPException(status_code=400, detail="ROM is not valid base64")
        if len(data) > MAX_ROM_SIZE:
            raise HTTPException(
                status_code=400,
                detail=f"ROM size exceeds limit of {MAX_ROM_SIZE} bytes",
            )
        return data

    rom_name = request.rom_name
    if rom_name is None:
        rom_name = default_rom(ROM_DIR)
        if rom_name is None:
            raise HTTPException(
                status_code=400,
                detail="Either rom or rom_name is required; no default ROM available",
            )
    elif rom_name not in list_roms(ROM_DIR):
        raise HTTPException(status_code=404, detail=f"Unknown ROM: {rom_name}")

    try:
        return read_rom(ROM_DIR / rom_name)
    except LoadError as e:
        raise HTTPException(status_code=400, detail=e.message)


@app.get("/api/roms", response_model=RomListResponse)
async def get_roms():
    """List the ROMs available on the server."""
    return {"roms": list_roms(ROM_DIR)}


@app.post("/api/run", response_model=RunResponse)
async def run_rom(request: RunRequest):
    """Run a CHIP-8 program for a number of frames.

    Args:
        request: ROM (inline base64 or server-side name) and run options

    Returns:
        Final machine state and frame buffer
    """
    rom = _load_rom(request)
    opts = request.options or RunOptionsModel()

    key_events: dict[int, list[tuple[int, bool]]] = {}
    for event in opts.key_events:
        key_events.setdefault(event.frame, []).append(
            (_resolve_key(event.key), event.pressed)
        )

    run_opts = RunOptions(
        frames=opts.frames,
        ticks_per_frame=opts.ticks_per_frame,
        key_events=key_events,
        seed=opts.seed,
        render=opts.render,
        render_scale=opts.render_scale,
    )

    logger.debug("Running %d-byte ROM for %d frames", len(rom), run_opts.frames)
    result = run_program(rom, options=run_opts)

    return result.to_dict()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8080)
