"""Tests for customer feedback."""

FEEDBACK = {"name": "Carol", "email": "carol@example.com", "message": "Great pizza!"}


class TestFeedback:
    def test_submit_and_list(self, client):
        response = client.post("/feedback", json=FEEDBACK)
        assert response.status_code == 201
        created = response.json()
        assert created["name"] == "Carol"
        assert created["message"] == "Great pizza!"

        listed = client.get("/feedback").json()
        assert [f["id"] for f in listed] == [created["id"]]

    def test_list_oldest_first(self, client):
        client.post("/feedback", json=FEEDBACK)
        client.post("/feedback", json={**FEEDBACK, "message": "Cold fries"})
        messages = [f["message"] for f in client.get("/feedback").json()]
        assert messages == ["Great pizza!", "Cold fries"]

    def test_missing_message(self, client):
        response = client.post("/feedback", json={"name": "Carol", "email": "carol@example.com"})
        assert response.status_code == 422
        assert response.json()["code"] == "validation_error"

    def test_delete(self, client):
        feedback_id = client.post("/feedback", json=FEEDBACK).json()["id"]
        response = client.delete(f"/feedback/{feedback_id}")
        assert response.status_code == 200
        assert client.get("/feedback").json() == []

    def test_delete_never_created_succeeds(self, client):
        response = client.delete("/feedback/9999")
        assert response.status_code == 200
        assert response.json() == {"message": "Feedback deleted"}

    def test_delete_with_non_numeric_id(self, client):
        response = client.delete("/feedback/abc")
        assert response.status_code == 422
        assert response.json()["code"] == "validation_error"
