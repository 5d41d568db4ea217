"""End-to-end request lifecycle over HTTP."""


def _auth(token):
    return {"Authorization": f"Bearer {token}"}


def test_request_lifecycle(client, admin_headers):
    signup = client.post(
        "/api/signup",
        json={
            "email": "ana@example.edu",
            "studentId": "2022-01234",
            "firstName": "Ana",
            "lastName": "Reyes",
            "password": "anapass123",
        },
    )
    assert signup.status_code == 200

    login = client.post("/api/login", json={"email": "ana@example.edu", "password": "anapass123"})
    assert login.status_code == 200
    student = _auth(login.json()["accessToken"])

    created = client.post(
        "/api/requests", json={"documentType": "tor", "quantity": 1}, headers=student
    )
    assert created.status_code == 200
    request = created.json()["request"]
    assert request["total"] == 150
    assert request["status"] == "pending"
    request_id = request["id"]

    processing = client.put(
        f"/api/requests/{request_id}", json={"status": "processing"}, headers=admin_headers
    )
    assert processing.status_code == 200

    thread = client.get(f"/api/messages/{request_id}", headers=student).json()["messages"]
    assert [m["text"] for m in thread] == [
        "Your request has been received. Please upload proof of payment.",
        "Payment confirmed. Your request is now being processed.",
    ]

    sent = client.post(
        "/api/messages",
        json={"conversationId": request_id, "text": "Receipt attached", "fileUrl": "https://files.example/r.jpg"},
        headers=student,
    )
    assert sent.status_code == 200

    completed = client.put(
        f"/api/requests/{request_id}", json={"status": "completed"}, headers=admin_headers
    )
    assert completed.status_code == 200

    locked = client.post(
        "/api/messages",
        json={"conversationId": request_id, "text": "One more thing"},
        headers=student,
    )
    assert locked.status_code == 400
    assert locked.json() == {"error": "Conversation is closed"}

    thread = client.get(f"/api/messages/{request_id}", headers=student).json()["messages"]
    assert thread[-1]["text"] == "Request completed. Thank you!"
    assert len(thread) == 4
