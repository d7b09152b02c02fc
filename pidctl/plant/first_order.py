import numpy as np


class FirstOrderPlant:
    """Simulated first-order process y' = (gain * u - y) / tau.

    Integrated with forward Euler at the caller's dt. measure() adds Gaussian
    noise from a seeded generator so runs are reproducible.
    """
    def __init__(self, gain=1.0, tau=1.0, y0=0.0, noise_std=0.0, seed=42):
        if tau <= 0:
            raise ValueError(f"tau must be positive, got {tau}")
        if noise_std < 0:
            raise ValueError(f"noise_std must be non-negative, got {noise_std}")
        self.gain = float(gain)
        self.tau = float(tau)
        self.noise_std = float(noise_std)
        self.y0 = float(y0)
        self.y = self.y0
        self._rng = np.random.default_rng(seed)

    def advance(self, u: float, dt: float) -> float:
        self.y += dt * (self.gain * u - self.y) / self.tau
        return self.y

    def measure(self) -> float:
        if self.noise_std == 0.0:
            return self.y
        return float(self.y + self._rng.normal(0, self.noise_std))

    def reset(self, y0=None):
        if y0 is not None:
            self.y0 = float(y0)
        self.y = self.y0
