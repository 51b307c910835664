"""
game_context.py
---------------
Session stats for the minefield: games, wins, losses, and the best winning time
per difficulty. Lives only as long as the process.
"""


class GameContext:
    def __init__(self):
        self.stats = {
            "games": 0,
            "wins": 0,
            "losses": 0,
            "difficulties": {},  # e.g. {"easy": {"wins": 2, "losses": 1, "best_time": 41.2}}
            "total_time": 0.0,  # seconds spent with a game in progress
        }
        self.last_result = {}  # filled when a game ends

    # -----------------------------------------------------
    #   Core logic
    # -----------------------------------------------------
    def record(self, difficulty, outcome, time_s):
        """Set last_result for a finished game and fold it into the stats."""
        self.last_result = {
            "difficulty": difficulty,
            "outcome": outcome,
            "time": round(float(time_s or 0.0), 2),
        }
        self.apply_result()

    def apply_result(self):
        """Apply the most recent game result to cumulative stats."""
        if not self.last_result:
            return

        r = self.last_result
        name = r.get("difficulty", "unknown")
        outcome = r.get("outcome", "")

        record = self.stats["difficulties"].setdefault(
            name, {"wins": 0, "losses": 0, "best_time": None}
        )
        self.stats["games"] += 1

        if outcome == "win":
            self.stats["wins"] += 1
            record["wins"] += 1
            t = r.get("time")
            if t is not None and (record["best_time"] is None or t < record["best_time"]):
                record["best_time"] = t
        elif outcome == "lose":
            self.stats["losses"] += 1
            record["losses"] += 1

    def best_time(self, difficulty):
        record = self.stats["difficulties"].get(difficulty)
        return record["best_time"] if record else None

    def add_playtime(self, dt):
        """Add delta-time (in seconds) to total runtime."""
        self.stats["total_time"] += dt

    def summary(self):
        return {
            "stats": self.stats,
            "last_result": self.last_result,
        }

    def __repr__(self):
        return (
            f"<GameContext games={self.stats['games']} wins={self.stats['wins']} "
            f"losses={self.stats['losses']} time={self.stats['total_time']:.1f}s>"
        )
