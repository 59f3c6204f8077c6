import random

# Inclusive bounds of the number to guess
SECRET_MIN = 1
SECRET_MAX = 100


class SecretGenerator:
    def __init__(self, seed: float | None = None, low: int = SECRET_MIN, high: int = SECRET_MAX):
        if low > high:
            raise ValueError(f"empty secret range [{low}, {high}]")
        self.rng = random.Random(seed)
        self.low = low
        self.high = high

    def generate(self) -> int:
        """Draw one secret uniformly from [low, high]."""
        return self.rng.randint(self.low, self.high)
