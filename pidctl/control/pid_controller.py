import math


class InvalidControllerConfig(ValueError):
    """Raised when a controller is built with dt <= 0 or clamp_lo >= clamp_hi."""


class PIDController:
    """Fixed-step PID controller driven by one error sample per call.

    The integral only accumulates while the previous raw output stayed strictly
    inside (clamp_lo, clamp_hi). The clamp bounds gate anti-windup only;
    step() returns the raw output and clamping the actuator is up to the caller.

    Derivative smoothing:
        d[n] = smooth * (e[n] - e[n-1]) / dt + (1 - smooth) * d[n-1]
    smooth = 1 turns smoothing off.
    """
    def __init__(self, dt, clamp, log_fn=None):
        lo, hi = clamp
        dt, lo, hi = float(dt), float(lo), float(hi)
        if not math.isfinite(dt) or dt <= 0:
            raise InvalidControllerConfig(f"dt must be positive, got {dt}")
        if not lo < hi:
            raise InvalidControllerConfig(f"clamp must satisfy lo < hi, got ({lo}, {hi})")
        self._dt = dt
        self._clamp_lo = lo
        self._clamp_hi = hi
        self._kp = 0.0
        self._ki = 0.0
        self._kd = 0.0
        self._smooth = 1.0
        self.log = log_fn
        self.reset()

    @classmethod
    def from_config(cls, section, log_fn=None):
        """section: {dt, clamp: [lo, hi], kp, ki, kd, smooth}; gains optional."""
        ctrl = cls(section['dt'], tuple(section['clamp']), log_fn=log_fn)
        ctrl.set_kp(section.get('kp', 0.0))
        ctrl.set_ki(section.get('ki', 0.0))
        ctrl.set_kd(section.get('kd', 0.0))
        ctrl.set_smooth(section.get('smooth', 1.0))
        return ctrl

    def reset(self):
        """Clear recurrence state; gains, dt, clamp and smoothing are kept."""
        self._p = 0.0  # never written by step()
        self._i = 0.0
        self._d = 0.0
        self._e_prev = 0.0
        self._unclamped = True

    def step(self, e: float) -> float:
        """Consume one error sample, return the unclamped control output."""
        if self._unclamped:
            self._i += self._dt * e

        self._d = self._smooth * (e - self._e_prev) / self._dt + (1.0 - self._smooth) * self._d

        u = self._kp * e + self._ki * self._i + self._kd * self._d

        self._unclamped = (self._clamp_lo < u) and (u < self._clamp_hi)
        self._e_prev = e
        return u

    # Setters ignore out-of-domain values and keep the prior one.
    def set_kp(self, kp: float) -> bool:
        if kp >= 0.0:
            self._kp = float(kp)
            return True
        self._reject('kp', kp)
        return False

    def set_ki(self, ki: float) -> bool:
        if ki >= 0.0:
            self._ki = float(ki)
            return True
        self._reject('ki', ki)
        return False

    def set_kd(self, kd: float) -> bool:
        if kd >= 0.0:
            self._kd = float(kd)
            return True
        self._reject('kd', kd)
        return False

    def set_smooth(self, smooth: float) -> bool:
        if 0.0 <= smooth <= 1.0:
            self._smooth = float(smooth)
            return True
        self._reject('smooth', smooth)
        return False

    def _reject(self, name, value):
        if self.log is not None:
            self.log(f"[PID] rejected {name}={value} (keeping {getattr(self, name)})")

    @property
    def dt(self): return self._dt

    @property
    def kp(self): return self._kp

    @property
    def ki(self): return self._ki

    @property
    def kd(self): return self._kd

    @property
    def clamp_lo(self): return self._clamp_lo

    @property
    def clamp_hi(self): return self._clamp_hi

    @property
    def smooth(self): return self._smooth

    @property
    def p(self): return self._p

    @property
    def i(self): return self._i

    @property
    def d(self): return self._d

    @property
    def unclamped(self): return self._unclamped

    @property
    def e_prev(self): return self._e_prev

    def __repr__(self):
        return (f"PIDController(dt={self._dt}, clamp=({self._clamp_lo}, {self._clamp_hi}), "
                f"kp={self._kp}, ki={self._ki}, kd={self._kd}, smooth={self._smooth})")
