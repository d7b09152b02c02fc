import numpy as np


class OutputLimiter:
    """Caller-side actuator clamp for controller output.

    PIDController.step() returns its raw output; this bounds it to the actuator
    range and, optionally, limits how far it may move per call.
    """
    def __init__(self, lo, hi, max_delta=None, log_fn=None):
        self.lo = float(lo)
        self.hi = float(hi)
        if not self.lo < self.hi:
            raise ValueError(f"limiter bounds must satisfy lo < hi, got ({self.lo}, {self.hi})")
        if max_delta is not None:
            max_delta = float(max_delta)
            if max_delta <= 0:
                raise ValueError(f"max_delta must be positive, got {max_delta}")
        self.max_delta = max_delta
        self.log = log_fn

    def saturated(self, u):
        return u < self.lo or u > self.hi

    def clamp(self, u, current=None):
        # absolute bounds
        target = float(np.clip(u, self.lo, self.hi))
        # per-call slew limit relative to the last applied value
        if self.max_delta is not None and current is not None:
            delta = target - current
            if abs(delta) > self.max_delta:
                target = current + (self.max_delta if delta > 0 else -self.max_delta)
        if target != u and self.log is not None:
            self.log(f"[LIMIT] {u:.4f} -> {target:.4f}")
        return target
