from locust import HttpUser, task, between
import random
import uuid

SEARCH_TERMS = ["pikachu", "charizard", "BULBASAUR", "25", "150", "mew", "missingno"]


class PokeExplorerUser(HttpUser):
    wait_time = between(1, 3)

    def on_start(self):
        username = f"locust-{uuid.uuid4().hex[:12]}"
        response = self.client.post(
            "/auth/register",
            json={"username": username, "password": "pikachu1"},
            name="/auth/register"
        )
        self.token = response.json().get("token") if response.status_code == 201 else None

    def _headers(self):
        return {"Authorization": f"Bearer {self.token}"}

    @task(3)
    def search(self):
        if not self.token:
            return

        with self.client.post(
            "/api/search",
            json={"term": random.choice(SEARCH_TERMS)},
            headers=self._headers(),
            name="/api/search",
            catch_response=True
        ) as response:
            # Unknown names are an expected outcome, not a failure
            if response.status_code in (200, 404):
                response.success()

    @task(2)
    def list_pokemon(self):
        if not self.token:
            return

        self.client.get(
            f"/api/pokemon?limit=20&offset={random.randint(0, 50) * 20}",
            headers=self._headers(),
            name="/api/pokemon"
        )

    @task(1)
    def get_history(self):
        if not self.token:
            return

        self.client.get(
            "/api/search/history",
            headers=self._headers(),
            name="/api/search/history"
        )
