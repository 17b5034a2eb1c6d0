from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect, status

from stackcut.api.deps import get_store
from stackcut.api.models import (
    CutResponse,
    FrameModel,
    GameCreateRequest,
    GameListResponse,
    GameSnapshot,
    ReplayRequest,
    ReplayResponse,
    SpeedRequest,
    TickRequest,
)
from stackcut.engine import StackEngine
from stackcut.game_loop import Command, replay
from stackcut.game_store import GameStore, StoredGame
from stackcut.websocket_hub import hub

logger = logging.getLogger(__name__)

router = APIRouter()


def _require(store: GameStore, game_id: UUID) -> StoredGame:
    game = store.get_game(game_id)
    if game is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Game not found")
    return game


@router.websocket("/ws/game/{game_id}")
async def game_frames_ws(websocket: WebSocket, game_id: UUID, store: GameStore = Depends(get_store)) -> None:
    """Stream snapshots of one game; a client may send "cut" to request a cut."""

    game = store.get_game(game_id)
    if game is None:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await hub.subscribe(websocket, game.snapshot())
    try:
        while True:
            text = await websocket.receive_text()
            if text.strip().casefold() != "cut":
                continue
            if game.engine.request_cut():
                await hub.publish(game.snapshot())
    except WebSocketDisconnect:
        logger.debug("watcher left game %s", game_id)
    finally:
        hub.unsubscribe(game_id, websocket)


@router.post("/game", response_model=GameSnapshot, status_code=status.HTTP_201_CREATED)
async def create_game_route(payload: GameCreateRequest | None = None, store: GameStore = Depends(get_store)) -> GameSnapshot:
    overrides = payload.model_dump(exclude_none=True) if payload is not None else {}
    try:
        config = store.defaults.with_overrides(**overrides)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e

    game = store.create_game(config=config)
    logger.info("game %s created", game.game_id)
    return game.snapshot()


@router.get("/game", response_model=GameListResponse)
async def list_games_route(store: GameStore = Depends(get_store)) -> GameListResponse:
    return GameListResponse(games=[g.snapshot() for g in store.list_games()])


@router.get("/game/{game_id}", response_model=GameSnapshot)
async def get_game_route(game_id: UUID, store: GameStore = Depends(get_store)) -> GameSnapshot:
    return _require(store, game_id).snapshot()


@router.delete("/game/{game_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_game_route(game_id: UUID, store: GameStore = Depends(get_store)) -> None:
    if store.delete_game(game_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Game not found")
    await hub.close_game(game_id)
    logger.info("game %s deleted", game_id)


@router.post("/game/{game_id}/tick", response_model=GameSnapshot)
async def tick_route(game_id: UUID, payload: TickRequest, store: GameStore = Depends(get_store)) -> GameSnapshot:
    game = _require(store, game_id)
    game.engine.tick(payload.elapsed)
    snap = game.snapshot()
    await hub.publish(snap)
    return snap


@router.post("/game/{game_id}/cut", response_model=CutResponse)
async def cut_route(game_id: UUID, store: GameStore = Depends(get_store)) -> CutResponse:
    game = _require(store, game_id)
    accepted = game.engine.request_cut()
    snap = game.snapshot()
    if accepted:
        await hub.publish(snap)
    return CutResponse(accepted=accepted, state=snap)


@router.post("/game/{game_id}/speed", response_model=GameSnapshot)
async def speed_route(game_id: UUID, payload: SpeedRequest, store: GameStore = Depends(get_store)) -> GameSnapshot:
    game = _require(store, game_id)
    try:
        game.engine.set_speed(payload.speed)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e
    snap = game.snapshot()
    await hub.publish(snap)
    return snap


@router.post("/game/{game_id}/reset", response_model=GameSnapshot)
async def reset_route(game_id: UUID, store: GameStore = Depends(get_store)) -> GameSnapshot:
    game = _require(store, game_id)
    game.engine.reset()
    snap = game.snapshot()
    await hub.publish(snap)
    return snap


@router.post("/game/{game_id}/replay", response_model=ReplayResponse)
async def replay_route(game_id: UUID, payload: ReplayRequest, store: GameStore = Depends(get_store)) -> ReplayResponse:
    """Replay a command script on a scratch engine with this game's config.

    The stored game is left untouched.
    """

    game = _require(store, game_id)
    commands = [Command(kind=c.kind, elapsed=c.elapsed) for c in payload.commands]
    scratch = StackEngine(game.engine.config)
    frames = replay(commands, engine=scratch)
    return ReplayResponse(
        frames=[FrameModel(index=f.index, elapsed=f.elapsed, snapshot=f.snapshot) for f in frames],
        final=scratch.snapshot(),
    )
