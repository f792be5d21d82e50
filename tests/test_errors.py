def test_unhandled_error_body_hides_exception_text(app, client):
    @app.get("/_boom")
    def boom():
        raise RuntimeError("INSERT INTO contact_tokens VALUES ('contact@example.com')")

    r = client.get("/_boom")

    assert r.status_code == 500
    assert r.json() == {"error": "internal"}


def test_unknown_route_uses_error_shape(client):
    r = client.get("/nowhere")

    assert r.status_code == 404
    assert r.json() == {"error": "Not Found"}
