import os
import random

from locust import HttpUser, between, task

TRIP_IDS = [int(t) for t in os.getenv("LOCUST_TRIP_IDS", "1").split(",")]


class TripJournalUser(HttpUser):
    wait_time = between(1, 3)

    def on_start(self):
        """
        Attach a bearer token issued for a user that owns LOCUST_TRIP_IDS.
        """
        token = os.getenv("LOCUST_TOKEN")
        if token:
            self.client.headers.update({"Authorization": f"Bearer {token}"})

    @task(5)
    def suggest_albums(self):
        trip_id = random.choice(TRIP_IDS)
        self.client.get(f"/api/photos/trip/{trip_id}/suggest-albums", name="/api/photos/trip/[id]/suggest-albums")

    @task(1)
    def accept_first_suggestion(self):
        trip_id = random.choice(TRIP_IDS)
        with self.client.get(
            f"/api/photos/trip/{trip_id}/suggest-albums",
            name="/api/photos/trip/[id]/suggest-albums",
            catch_response=True,
        ) as response:
            suggestions = response.json() if response.ok else []
        if not suggestions:
            return

        suggestion = suggestions[0]
        payload = {
            "name": f"{suggestion['label']} {random.randint(1, 1000)}",
            "photo_ids": suggestion["photo_ids"],
        }
        self.client.post(
            f"/api/photos/trip/{trip_id}/accept-suggestion",
            json=payload,
            name="/api/photos/trip/[id]/accept-suggestion",
        )

    @task(1)
    def health_check(self):
        self.client.get("/health")
