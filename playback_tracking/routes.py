"""
Player Event Routes

Flask routes through which a remote player reports its raw lifecycle events
(and the sibling tracking events it derives itself).
"""

from typing import Any, Dict, Optional, Tuple

from flask import Blueprint, jsonify, request

from .event_types import EventType
from .registry import PlayerRegistry

STATE_FIELDS = {
    "currentTime": "current_time",
    "duration": "duration",
    "seeking": "seeking",
    "scrubbing": "scrubbing",
}


def _parse_state(body: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[str]]:
    """Extract player state fields from a request body.
    
    Returns:
        (state kwargs, None) on success or (None, offending field) on failure
    """
    state = {}
    for wire_name, attr in STATE_FIELDS.items():
        if wire_name not in body or body[wire_name] is None:
            continue
        value = body[wire_name]
        if attr in ("seeking", "scrubbing"):
            if not isinstance(value, bool):
                return None, wire_name
        elif isinstance(value, bool) or not isinstance(value, (int, float)):
            return None, wire_name
        state[attr] = value
    return state, None


def create_player_events_blueprint(registry: PlayerRegistry):
    """Create a Flask blueprint for player event ingestion.
    
    Args:
        registry: PlayerRegistry holding the tracked players
        
    Returns:
        Flask blueprint with player event routes
    """
    bp = Blueprint('player_events', __name__)
    
    @bp.route("/players/<player_id>/events", methods=["POST"])
    def ingest_event(player_id):
        """Ingest one player event."""
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            return jsonify({"error": "invalid-json"}), 400
        
        event_type = str(body.get("type", "")).strip()
        if event_type not in EventType.get_ingestible_types():
            return jsonify({"error": "invalid-event", "type": event_type}), 400
        
        data = body.get("data") or {}
        if not isinstance(data, dict):
            return jsonify({"error": "invalid-data"}), 400
        
        state, bad_field = _parse_state(body)
        if state is None:
            return jsonify({"error": "invalid-state", "field": bad_field}), 400
        
        if event_type == EventType.DISPOSE.value:
            if not registry.dispose(player_id):
                return jsonify({"error": "unknown-player"}), 404
            return jsonify({"status": "ok"})
        
        player = registry.get_or_create(player_id)
        player.emit(event_type, data, **state)
        return jsonify({"status": "ok"})
    
    @bp.route("/players", methods=["GET"])
    def list_players():
        """List the ids of players currently tracked."""
        return jsonify({
            "status": "ok",
            "players": registry.player_ids()
        })
    
    return bp
