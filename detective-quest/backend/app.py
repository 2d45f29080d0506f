"""Backend API for the Detective Quest mansion investigation."""
import logging
import os
from pathlib import Path

from flask import Flask, jsonify, request
from flask_cors import CORS

from investigation.case_file import CaseFile
from investigation.game_data import reference_case
from investigation.locations import teardown
from investigation.session import ExplorationSession, SessionState, parse_command
from investigation.verdict import parse_accusation, tally

logger = logging.getLogger(__name__)

CASE_PATH = os.getenv("DETECTIVE_QUEST_CASE", "").strip()

app = Flask(__name__)
CORS(app)


def load_case() -> CaseFile:
    """Case named by DETECTIVE_QUEST_CASE, or the built-in mansion."""
    if CASE_PATH:
        return CaseFile.load(Path(CASE_PATH))
    return reference_case()


CASE = load_case()

# In-memory game state (will reset on server restart)
game_state = {"session": None}


def new_session() -> ExplorationSession:
    return ExplorationSession(root=CASE.build_map(), index=CASE.build_index())


def reset_game():
    """Throw away the current game and start over at the entrance."""
    global game_state
    previous = game_state.get("session")
    if previous is not None:
        teardown(previous.root)
    game_state = {"session": new_session()}


def current_session() -> ExplorationSession:
    if game_state["session"] is None:
        reset_game()
    return game_state["session"]


def error(message, status=400, **extra):
    body = {"status": "error", "message": message}
    body.update(extra)
    return jsonify(body), status


@app.route('/api/game/new', methods=['POST'])
def new_game():
    """Start a new game."""
    reset_game()
    session = current_session()
    return jsonify({
        "status": "success",
        "message": "New game started",
        "case_info": {"name": CASE.name, "intro": CASE.intro},
        "room": session.current_room.to_dict(),
    })


@app.route('/api/game/state', methods=['GET'])
def get_state():
    """Get current game state."""
    session = current_session()
    exploring = session.state is SessionState.EXPLORING
    return jsonify({
        "state": session.state.value,
        "room": session.current_room.to_dict() if exploring else None,
        "moves": [move.value for move in session.available_moves()],
        "visits_count": len(session.visits),
        "clues_collected_count": len(session.ledger),
        "judgment": session.judgment.to_dict() if session.judgment else None,
    })


@app.route('/api/game/move', methods=['POST'])
def move():
    """Send one exploration command (e/d/s or left/right/exit)."""
    data = request.get_json(silent=True) or {}
    raw = data.get("command")

    if not isinstance(raw, str) or not raw.strip():
        return error("command required")

    session = current_session()
    if session.state is SessionState.EXITED:
        return error("Exploration already finished")

    result = session.step(parse_command(raw))
    if not result.accepted:
        return error(result.message, signal=result.signal, room=result.room.to_dict())

    body = {"status": "success", "signal": result.signal, "state": result.state.value}
    if result.room is not None:
        body["room"] = result.room.to_dict()
    if result.visits:
        body["visits"] = [{"number": number, "name": name} for number, name in result.visits]
    return jsonify(body)


@app.route('/api/game/clues', methods=['GET'])
def get_clues():
    """Get collected clues in order."""
    session = current_session()
    return jsonify({
        "clues": session.ledger.enumerate_in_order(),
        "collected_count": len(session.ledger),
    })


@app.route('/api/game/visits', methods=['GET'])
def get_visits():
    """Get the rooms visited so far, in arrival order."""
    session = current_session()
    return jsonify({
        "visits": [{"number": number, "name": name} for number, name in session.numbered_visits()]
    })


@app.route('/api/game/suspects', methods=['GET'])
def get_suspects():
    """Get the known suspects (without revealing which clue points where)."""
    session = current_session()
    return jsonify({
        "suspects": sorted(session.index.distinct_suspects()),
        "none_on_file": not session.index.has_suspects(),
    })


@app.route('/api/game/events', methods=['GET'])
def get_events():
    """Get journal events from an offset, or the latest ones filtered by type."""
    session = current_session()
    event_type = request.args.get("type") or None
    limit = request.args.get("limit", default=0, type=int)
    if event_type or limit:
        events = session.journal.read(limit=limit, event_type=event_type)
    else:
        since = request.args.get("since", default=0, type=int)
        events = [event for _, event in session.journal.iter_events_from(since)]
    return jsonify({"events": events, "next": len(session.journal)})


@app.route('/api/game/accuse', methods=['POST'])
def accuse():
    """Make final accusation."""
    data = request.get_json(silent=True) or {}
    session = current_session()

    if session.judgment is not None:
        return error("Game already complete")
    if session.state is not SessionState.EXITED:
        return error("Finish exploring before making an accusation.")

    raw = data.get("suspect")
    accused = parse_accusation(raw if isinstance(raw, str) else None)
    if accused is None:
        session.cancel_accusation()
        return error("No name given. Accusation cancelled.")

    judgment = session.accuse(accused)
    body = {"status": "success", "tally": tally(session.ledger, session.index)}
    body.update(judgment.to_dict())
    if judgment.suspect is not None:
        body["supporting_clues"] = [
            clue for clue in session.index.clues_for(judgment.suspect) if clue in session.ledger
        ]
    return jsonify(body)


@app.route('/health', methods=['GET'])
def health():
    """Health check endpoint."""
    return jsonify({"status": "ok", "service": "detective-quest-backend"})


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    app.run(debug=True, port=5001)
