"""ValoCoach - Valorant coaching chat assistant."""
