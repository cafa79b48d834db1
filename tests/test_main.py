"""
Test cases for main API endpoints
"""


def test_root_endpoint(client):
    """Test root endpoint returns correct response"""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["version"] == "1.0.0"
    assert data["endpoints"]["image"]["enhance"] == "/api/image/enhance"


def test_health_check_endpoint(client):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert "timestamp" in data
    assert data["uptime"] >= 0
    assert "running" in data["cleanupScheduler"]
    assert data["cleanupScheduler"]["interval_minutes"] > 0


def test_test_endpoint(client):
    response = client.get("/test")
    assert response.status_code == 200
    assert response.json()["message"] == "Server is working"


def test_image_routes_test_endpoint(client):
    response = client.get("/api/image/test")
    assert response.status_code == 200
    assert response.json() == {"message": "Image routes are working"}


def test_unknown_route_returns_json_404(client):
    """Test unmatched routes return the JSON not-found body"""
    response = client.get("/api/does-not-exist")
    assert response.status_code == 404
    data = response.json()
    assert data["error"] == "Not found"
    assert data["details"] == "Cannot GET /api/does-not-exist"
    assert "/api/image/enhance" in data["availableEndpoints"]


def test_wrong_method_returns_json_404(client):
    """Test a known path with the wrong method gets the same not-found body"""
    response = client.get("/api/image/enhance")
    assert response.status_code == 404
    data = response.json()
    assert data["error"] == "Not found"
    assert data["details"] == "Cannot GET /api/image/enhance"


def test_malformed_multipart_returns_error_envelope(client):
    """Test an unparseable multipart body is reported in the error envelope"""
    response = client.post(
        "/api/image/enhance",
        content=b"--xyz\r\nContent-Disposition form-data\r\n\r\nvalue\r\n--xyz--\r\n",
        headers={"content-type": "multipart/form-data; boundary=xyz"},
    )
    assert response.status_code == 400
    data = response.json()
    assert data["success"] is False
    assert data["error"]
    assert "detail" not in data


def test_docs_accessible(client):
    """Test that API documentation is accessible"""
    response = client.get("/docs")
    assert response.status_code == 200
