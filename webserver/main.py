from fastapi import FastAPI, HTTPException, Request

from trajectory_simulation.putting import integrate
from trajectory_simulation.result import evaluate, recommend_putt
from trajectory_simulation.shot_context import build_shot_context, validate_shot_context
from utility.config_reader import configure_logging

configure_logging()

app = FastAPI(title="Putting Physics Engine")


async def _payload(request: Request) -> dict:
    data = await request.json()
    if not isinstance(data, dict):
        raise HTTPException(status_code=422, detail="Request body must be a JSON object")
    return data


def _number(data: dict, key: str, default: float) -> float:
    value = data.get(key, default)
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


@app.post('/putt')
async def putt(request: Request):
    data = await _payload(request)
    hole_yards = _number(data, "holePositionYards", _number(data, "holeDistanceFeet", 10.0) / 3)
    context = build_shot_context(
        _number(data, "ballPositionYards", 0.0),
        hole_yards,
        data.get("gameMode", "putt"),
        _number(data, "greenSpeed", 10.0),
    )
    validation = validate_shot_context(context)
    context = validation.context
    positions = integrate(
        context,
        _number(data, "power", 100.0),
        _number(data, "aimAngle", 0.0),
        _number(data, "slopeUpDown", 0.0),
        _number(data, "slopeLeftRight", 0.0),
    )
    result = evaluate(positions, context)
    return {
        "positions": [p.tolist() for p in positions],
        "result": result.as_dict(),
        "validation": {"valid": validation.valid, "issues": validation.issues},
    }


@app.post('/recommend')
async def recommend(request: Request):
    data = await _payload(request)
    context = build_shot_context(
        _number(data, "ballPositionYards", 0.0),
        _number(data, "holePositionYards", 10.0 / 3),
        data.get("gameMode", "putt"),
        _number(data, "greenSpeed", 10.0),
    )
    return recommend_putt(context)


if __name__ == '__main__':
    import os

    import uvicorn
    port = int(os.getenv('PORT', '8000'))
    uvicorn.run(app, host='0.0.0.0', port=port)
