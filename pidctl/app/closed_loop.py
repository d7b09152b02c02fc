import argparse
import numpy as np

from ..control.pid_controller import PIDController
from ..safety.output_limiter import OutputLimiter
from ..plant.first_order import FirstOrderPlant

def load_config(path):
    import yaml
    with open(path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f)

def run(cfg, log_fn=print):
    """Run the controller against the simulated plant in simulated time.

    Returns a dict of per-step arrays (t, y, u, u_act, i, d) plus
    saturated_steps and final_error.
    """
    log = log_fn

    ctrl = PIDController.from_config(cfg['controller'], log_fn=log)

    lim_cfg = cfg.get('limiter', {})
    limiter = OutputLimiter(lo=lim_cfg.get('lo', ctrl.clamp_lo),
                            hi=lim_cfg.get('hi', ctrl.clamp_hi),
                            max_delta=lim_cfg.get('max_delta'))

    pl = cfg.get('plant', {})
    plant = FirstOrderPlant(gain=pl.get('gain', 1.0), tau=pl.get('tau', 1.0),
                            y0=pl.get('y0', 0.0), noise_std=pl.get('noise_std', 0.0),
                            seed=pl.get('seed', 42))

    sim = cfg['simulation']
    steps = max(1, int(sim['steps']))
    setpoint = float(sim['setpoint'])
    log_every = max(1, int(sim.get('log_every', 50)))

    hist = {k: np.zeros(steps) for k in ('t', 'y', 'u', 'u_act', 'i', 'd')}
    saturated_steps = 0
    u_act = 0.0
    n = 0

    log(f"[START] steps={steps} dt={ctrl.dt} setpoint={setpoint} {ctrl!r}")
    try:
        for n in range(steps):
            error = setpoint - plant.measure()
            u = ctrl.step(error)
            if limiter.saturated(u):
                saturated_steps += 1
            u_act = limiter.clamp(u, current=u_act)
            y = plant.advance(u_act, ctrl.dt)

            hist['t'][n] = (n + 1) * ctrl.dt
            hist['y'][n] = y
            hist['u'][n] = u
            hist['u_act'][n] = u_act
            hist['i'][n] = ctrl.i
            hist['d'][n] = ctrl.d

            if n % log_every == 0:
                log(f"[CTRL] t={hist['t'][n]:.3f} e={error:.4f} u={u:.4f} "
                    f"u_act={u_act:.4f} i={ctrl.i:.4f} unclamped={ctrl.unclamped}")
        n = steps
    except KeyboardInterrupt:
        log("[STOP] Interrupted by user.")
        hist = {k: v[:n] for k, v in hist.items()}

    final_error = setpoint - plant.y
    log(f"[END] final_error={final_error:.4f} saturated_steps={saturated_steps}")
    hist['saturated_steps'] = saturated_steps
    hist['final_error'] = final_error
    return hist

def main(argv=None):
    p = argparse.ArgumentParser(description="Closed-loop PID simulation against a first-order plant.")
    p.add_argument('--config', default='configs/config.yaml')
    p.add_argument('--steps', type=int, default=None)
    p.add_argument('--setpoint', type=float, default=None)
    p.add_argument('--quiet', action='store_true')
    args = p.parse_args(argv)

    cfg = load_config(args.config)
    if args.steps is not None:
        cfg['simulation']['steps'] = args.steps
    if args.setpoint is not None:
        cfg['simulation']['setpoint'] = args.setpoint

    if args.quiet:
        def log(msg): pass
    else:
        def log(msg): print(msg)

    result = run(cfg, log_fn=log)
    print(f"final_error={result['final_error']:.6f} saturated_steps={result['saturated_steps']}")
    return 0

if __name__ == '__main__':
    raise SystemExit(main())
