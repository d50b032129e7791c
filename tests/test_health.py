from careerconnect import main


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_health_reports_mongodb(client, monkeypatch):
    monkeypatch.setattr(main, "test_mongo_connection", lambda: True)
    assert client.get("/health").json() == {"status": "healthy", "mongodb": "connected"}

    monkeypatch.setattr(main, "test_mongo_connection", lambda: False)
    assert client.get("/health").json() == {"status": "healthy", "mongodb": "disconnected"}


def test_unknown_route_uses_message_shape(client):
    response = client.get("/nowhere")
    assert response.status_code == 404
    assert response.json() == {"message": "Not Found"}
