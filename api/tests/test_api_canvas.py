"""
Canvas layout routes and server-held canvas sessions
"""

import json

import pytest


def _down_on(node_id, x, y):
    return {"type": "pointer_down", "x": x, "y": y, "target": {"kind": "node", "nodeId": node_id}}


def test_timeline_layout_matches_zigzag(client):
    res = client.get("/api/canvas/timeline/layout")
    assert res.status_code == 200
    body = res.json()
    assert [n["x"] for n in body["nodes"]] == [140, 420, 700, 980, 1260]
    assert [n["y"] for n in body["nodes"]] == pytest.approx([160, 57.6, 262.4, 57.6, 262.4])
    assert body["width"] == 1500
    assert body["height"] == 420
    assert body["path"].startswith("M 140 160 L 420 57.6")
    assert all(not n["manual"] for n in body["nodes"])
    assert body["nodes"][0]["gradient"]["className"] == "from-violet-500 to-purple-600"


def test_timeline_svg_is_served(client):
    res = client.get("/api/canvas/timeline.svg")
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("image/svg+xml")
    assert res.text.startswith("<svg")
    assert 'data-node-id="m0"' in res.text


def test_strategy_layout_is_symmetric_v(client):
    body = client.get("/api/canvas/strategy/layout").json()
    xs = [p["x"] for p in body["positions"]]
    assert xs[2] == 410
    assert xs[0] + xs[4] == pytest.approx(2 * 410)
    assert body["width"] == 1100
    assert body["height"] == 650
    assert body["bounds"] == {"minX": 0, "minY": 0, "maxX": 940, "maxY": 650}


def test_layout_tolerates_unrecognized_phase_and_shape(client, document, content_file):
    document["timeline"][0]["phase"] = "leadership"
    document["timeline"][1]["shape"] = "hexagon"
    content_file.write_text(json.dumps(document), encoding="utf-8")

    assert client.get("/api/content").status_code == 200
    res = client.get("/api/canvas/timeline/layout")
    assert res.status_code == 200
    nodes = res.json()["nodes"]
    assert nodes[0]["gradient"]["className"] == "from-gray-500 to-gray-600"
    assert nodes[1]["shape"] == "card"
    assert client.get("/api/canvas/timeline.svg").status_code == 200


def test_layout_500_when_content_missing(client, content_file):
    content_file.unlink()
    res = client.get("/api/canvas/timeline/layout")
    assert res.status_code == 500
    assert res.json() == {"error": "Failed to load content"}


def test_timeline_session_drag_at_zoom(client):
    session = client.post("/api/canvas/sessions", json={"kind": "timeline"}).json()
    assert session["viewport"]["scale"] == 0.85
    assert session["state"] == "idle"
    sid = session["id"]

    res = client.post(
        f"/api/canvas/sessions/{sid}/events",
        json={
            "events": [
                {"type": "wheel", "deltaY": -1000},
                _down_on("m2", 0, 0),
                {"type": "pointer_move", "x": 100, "y": 50},
            ]
        },
    )
    body = res.json()
    assert body["viewport"]["scale"] == 2.0
    assert body["state"] == "dragging_node"
    assert body["draggingNodeId"] == "m2"
    node = body["layout"]["nodes"][2]
    assert node["x"] == pytest.approx(750)
    assert node["y"] == pytest.approx(287.4)
    assert node["manual"] is True

    done = client.post(f"/api/canvas/sessions/{sid}/events", json={"events": [{"type": "pointer_up"}]}).json()
    assert done["state"] == "idle"
    assert done["outcomes"] == [{"type": "pointer_up", "changed": False, "clicked": None}]
    assert done["expandedId"] is None


def test_click_toggles_expansion(client):
    sid = client.post("/api/canvas/sessions", json={"kind": "timeline"}).json()["id"]
    events = [_down_on("m1", 10, 10), {"type": "pointer_move", "x": 12, "y": 12}, {"type": "pointer_up"}]
    body = client.post(f"/api/canvas/sessions/{sid}/events", json={"events": events}).json()
    assert body["expandedId"] == "m1"
    assert body["outcomes"][-1]["clicked"] == "m1"
    assert body["layout"]["nodes"][1]["manual"] is False

    body = client.post(f"/api/canvas/sessions/{sid}/events", json={"events": [{"type": "toggle", "nodeId": "m3"}]}).json()
    assert body["expandedId"] == "m3"


def test_background_pan_and_leave(client):
    sid = client.post("/api/canvas/sessions", json={"kind": "timeline"}).json()["id"]
    events = [
        {"type": "pointer_down", "x": 0, "y": 0},
        {"type": "pointer_move", "x": 30, "y": -20},
        {"type": "pointer_leave"},
    ]
    body = client.post(f"/api/canvas/sessions/{sid}/events", json={"events": events}).json()
    assert body["viewport"]["pan"] == {"x": 30, "y": -20}
    assert body["state"] == "idle"


def test_detail_overlay_open_and_escape(client):
    sid = client.post("/api/canvas/sessions", json={"kind": "timeline"}).json()["id"]
    body = client.post(
        f"/api/canvas/sessions/{sid}/events", json={"events": [{"type": "open_detail", "nodeId": "m4"}]}
    ).json()
    assert body["overlayNode"]["id"] == "m4"

    body = client.post(f"/api/canvas/sessions/{sid}/events", json={"events": [{"type": "key", "key": "Escape"}]}).json()
    assert body["overlayNode"] is None
    assert body["outcomes"][0]["changed"] is True


def test_unknown_node_is_404(client):
    sid = client.post("/api/canvas/sessions", json={"kind": "timeline"}).json()["id"]
    res = client.post(f"/api/canvas/sessions/{sid}/events", json={"events": [_down_on("ghost", 0, 0)]})
    assert res.status_code == 404
    assert res.json() == {"error": "Node ghost not found"}


def test_node_target_without_id_is_rejected(client):
    sid = client.post("/api/canvas/sessions", json={"kind": "timeline"}).json()["id"]
    events = [{"type": "pointer_down", "x": 0, "y": 0, "target": {"kind": "node"}}]
    assert client.post(f"/api/canvas/sessions/{sid}/events", json={"events": events}).status_code == 422


def test_strategy_session_has_no_pan_zoom_or_overlay(client):
    session = client.post("/api/canvas/sessions", json={"kind": "strategy"}).json()
    sid = session["id"]
    assert session["viewport"]["scale"] == 1.0

    events = [{"type": "wheel", "deltaY": -500}, {"type": "pointer_down", "x": 0, "y": 0}, {"type": "pointer_move", "x": 40, "y": 40}]
    body = client.post(f"/api/canvas/sessions/{sid}/events", json={"events": events}).json()
    assert body["viewport"] == {"pan": {"x": 0, "y": 0}, "scale": 1.0}
    assert body["state"] == "idle"

    res = client.post(f"/api/canvas/sessions/{sid}/events", json={"events": [{"type": "open_detail", "nodeId": "0"}]})
    assert res.status_code == 400


def test_strategy_drag_is_clamped(client):
    sid = client.post("/api/canvas/sessions", json={"kind": "strategy"}).json()["id"]
    events = [_down_on("0", 0, 0), {"type": "pointer_move", "x": 5000, "y": 5000}, {"type": "pointer_up"}]
    body = client.post(f"/api/canvas/sessions/{sid}/events", json={"events": events}).json()
    assert body["layout"]["positions"][0] == {"x": 940, "y": 650}


def test_commit_requires_admin(client):
    sid = client.post("/api/canvas/sessions", json={"kind": "strategy"}).json()["id"]
    assert client.post(f"/api/canvas/sessions/{sid}/commit").status_code == 401


def test_commit_strategy_positions(admin_client, content_file, read_document):
    sid = admin_client.post("/api/canvas/sessions", json={"kind": "strategy"}).json()["id"]
    events = [_down_on("1", 0, 0), {"type": "pointer_move", "x": -9999, "y": -9999}, {"type": "pointer_up"}]
    admin_client.post(f"/api/canvas/sessions/{sid}/events", json={"events": events})

    res = admin_client.post(f"/api/canvas/sessions/{sid}/commit")
    assert res.json() == {"success": True, "positions": 5}
    stored = read_document(content_file)["strategy"]["pointPositions"]
    assert len(stored) == 5
    assert stored[1] == {"x": 0, "y": 0}


def test_commit_strategy_rejects_changed_point_count(admin_client, document, content_file, read_document):
    sid = admin_client.post("/api/canvas/sessions", json={"kind": "strategy"}).json()["id"]
    document["strategy"]["points"].append("Teach")
    assert admin_client.put("/api/content", json=document).status_code == 200

    res = admin_client.post(f"/api/canvas/sessions/{sid}/commit")
    assert res.status_code == 409
    assert res.json() == {"error": "Strategy points changed since the session started"}
    strategy = read_document(content_file)["strategy"]
    assert len(strategy["points"]) == 6
    assert "pointPositions" not in strategy


def test_commit_timeline_positions(admin_client, content_file, read_document):
    sid = admin_client.post("/api/canvas/sessions", json={"kind": "timeline"}).json()["id"]
    events = [_down_on("m0", 0, 0), {"type": "pointer_move", "x": 85, "y": 0}, {"type": "pointer_up"}]
    admin_client.post(f"/api/canvas/sessions/{sid}/events", json={"events": events})

    res = admin_client.post(f"/api/canvas/sessions/{sid}/commit")
    assert res.json() == {"success": True, "positions": 1}
    timeline = read_document(content_file)["timeline"]
    assert timeline[0]["position"]["x"] == pytest.approx(240)
    assert timeline[0]["position"]["y"] == pytest.approx(160)
    assert "position" not in timeline[1]


def test_session_lifecycle(client):
    sid = client.post("/api/canvas/sessions", json={}).json()["id"]
    assert client.get(f"/api/canvas/sessions/{sid}").json()["kind"] == "timeline"
    assert client.delete(f"/api/canvas/sessions/{sid}").json() == {"success": True}
    res = client.get(f"/api/canvas/sessions/{sid}")
    assert res.status_code == 404
    assert res.json() == {"error": f"Canvas session {sid} not found"}
