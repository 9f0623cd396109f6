"""Shared route dependencies."""

from fastapi import Request

from ..services.engine import ProgressEngine


def get_engine(request: Request, user_id: str) -> ProgressEngine:
    """Get (or create) the engine for a user from app state.

    Engines are kept in least-recently-used order; past the cache size the
    oldest idle one is dropped and rebuilt from the store on its next request.
    """
    state = request.app.state
    engines = state.engines
    engine = engines.get(user_id)
    if engine is None:
        engine = ProgressEngine(
            store=state.store,
            user_id=user_id,
            clock=state.clock,
            first_weekday=state.first_weekday,
        )
        engines[user_id] = engine
        for stale_id in list(engines)[:-1]:
            if len(engines) <= state.engine_cache_size:
                break
            # Dropping an engine mid-write would let a new one race it
            if not engines[stale_id].busy:
                del engines[stale_id]
    else:
        engines.move_to_end(user_id)
    return engine
