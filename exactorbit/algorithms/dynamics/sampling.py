"""
Sampling simulated positions over a range of times.

Because ``Simulation.update`` is a pure function of time, a trajectory is just
the sequence of positions obtained by updating at each requested instant. The
functions here run that loop and pack the results into numpy arrays in SI
units, ready for plotting or further analysis with float tooling.
"""

import logging

import numpy as np
from tqdm import tqdm

from exactorbit.utils.conversions import to_decimal

logger = logging.getLogger(__name__)


def _iterate(times, progress, desc):
    if progress:
        return tqdm(times, desc=desc)
    return times


def sample_trajectory(simulation, name, times, progress=False):
    """
    Sample one body's position at several times.

    Parameters
    ----------
    simulation : Simulation
        Simulation holding the body. It is left updated to the last time.
    name : str
        Body name.
    times : iterable
        Absolute times in seconds (Decimal, integer (numpy included), str or float).
    progress : bool, optional
        Show a tqdm progress bar. Default is False.

    Returns
    -------
    tuple
        ``(t, positions)`` with ``t`` a float64 array of shape (n,) and
        ``positions`` a float64 array of shape (n, 3) in meters.
    """
    times = [to_decimal(t) for t in times]
    record = simulation.get_body(name)
    logger.info(f"Sampling '{name}' at {len(times)} times")

    positions = np.zeros((len(times), 3), dtype=np.float64)
    for i, t in enumerate(_iterate(times, progress, f"Sampling {name}")):
        simulation.update(t)
        positions[i] = record.position.as_array()

    return np.array([float(t) for t in times], dtype=np.float64), positions


def sample_system(simulation, times, progress=False):
    """
    Sample every body's position at several times.

    Parameters
    ----------
    simulation : Simulation
        Simulation to sample. It is left updated to the last time.
    times : iterable
        Absolute times in seconds.
    progress : bool, optional
        Show a tqdm progress bar. Default is False.

    Returns
    -------
    tuple
        ``(t, trajectories)`` where ``trajectories`` maps each body name to a
        float64 array of shape (n, 3).

    Notes
    -----
    Bodies that ``update`` does not reach (no static root) keep their
    previous state, so their rows repeat.
    """
    times = [to_decimal(t) for t in times]
    records = simulation.bodies
    logger.info(f"Sampling {len(records)} bodies at {len(times)} times")

    trajectories = {
        record.body.name: np.zeros((len(times), 3), dtype=np.float64)
        for record in records
    }
    for i, t in enumerate(_iterate(times, progress, "Sampling system")):
        simulation.update(t)
        for record in records:
            trajectories[record.body.name][i] = record.position.as_array()

    return np.array([float(t) for t in times], dtype=np.float64), trajectories
