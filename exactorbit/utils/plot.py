"""
Plotting functions for simulated body hierarchies.

This module provides matplotlib helpers for looking at a
:class:`~exactorbit.algorithms.dynamics.simulation.Simulation`:

- the current positions of all bodies, as a 3D scatter
- sampled trajectories from :func:`~exactorbit.algorithms.dynamics.sampling.sample_system`

Positions are converted to float64 for plotting only. Because absolute
positions can be ~1e20 m while orbits are ~1e8 m, both functions accept an
``origin`` body name and plot everything relative to it.
"""

import numpy as np
import matplotlib.pyplot as plt
from mpl_toolkits.mplot3d import Axes3D  # noqa: F401  registers the 3d projection


def plot_system(simulation, origin=None, ax=None, figsize=(10, 8), annotate=True):
    """
    Scatter the current position of every body in 3D.

    Parameters
    ----------
    simulation : Simulation
        An updated simulation.
    origin : str, optional
        Name of the body placed at the origin. Default is absolute coordinates.
    ax : matplotlib.axes.Axes, optional
        3D axes to draw on. If omitted a new figure is created and shown.
    figsize : tuple, default=(10, 8)
        Figure size in inches, used only when ``ax`` is omitted.
    annotate : bool, default=True
        Write each body's name next to its marker.

    Returns
    -------
    matplotlib.axes.Axes
        The axes drawn on.
    """
    show = ax is None
    if ax is None:
        fig = plt.figure(figsize=figsize)
        ax = fig.add_subplot(111, projection='3d')

    offset = np.zeros(3)
    if origin is not None:
        offset = simulation.get_body(origin).position.as_array()

    for record in simulation:
        position = record.position.as_array() - offset
        ax.scatter(position[0], position[1], position[2], label=record.body.name)
        if annotate:
            ax.text(position[0], position[1], position[2], record.body.name)

    ax.set_xlabel('X [m]')
    ax.set_ylabel('Y [m]')
    ax.set_zlabel('Z [m]')
    ax.set_title('Body positions' if origin is None else f'Body positions relative to {origin}')
    _set_axes_equal(ax)
    ax.legend()
    if show:
        plt.show()
    return ax


def plot_trajectories(trajectories, origin=None, ax=None, figsize=(10, 8)):
    """
    Plot sampled trajectories as 3D polylines.

    Parameters
    ----------
    trajectories : dict
        Body name to (n, 3) position array, as returned by ``sample_system``.
    origin : str, optional
        Name of the body whose trajectory is subtracted from all others.
    ax : matplotlib.axes.Axes, optional
        3D axes to draw on. If omitted a new figure is created and shown.
    figsize : tuple, default=(10, 8)
        Figure size in inches, used only when ``ax`` is omitted.

    Returns
    -------
    matplotlib.axes.Axes
        The axes drawn on.
    """
    show = ax is None
    if ax is None:
        fig = plt.figure(figsize=figsize)
        ax = fig.add_subplot(111, projection='3d')

    reference = 0.0
    if origin is not None:
        reference = trajectories[origin]

    for name, positions in trajectories.items():
        relative = np.asarray(positions) - reference
        ax.plot(relative[:, 0], relative[:, 1], relative[:, 2], label=name)

    ax.set_xlabel('X [m]')
    ax.set_ylabel('Y [m]')
    ax.set_zlabel('Z [m]')
    ax.set_title('Trajectories' if origin is None else f'Trajectories relative to {origin}')
    _set_axes_equal(ax)
    ax.legend()
    if show:
        plt.show()
    return ax


def _set_axes_equal(ax):
    """
    Make the 3D axes have equal scale so that circular orbits look circular.

    Parameters
    ----------
    ax : matplotlib.axes.Axes
        The axes to adjust.
    """
    x_limits = ax.get_xlim3d()
    y_limits = ax.get_ylim3d()
    z_limits = ax.get_zlim3d()
    x_range = abs(x_limits[1] - x_limits[0])
    y_range = abs(y_limits[1] - y_limits[0])
    z_range = abs(z_limits[1] - z_limits[0])
    max_range = 0.5 * max([x_range, y_range, z_range])

    x_mid = 0.5 * sum(x_limits)
    y_mid = 0.5 * sum(y_limits)
    z_mid = 0.5 * sum(z_limits)

    ax.set_xlim3d([x_mid - max_range, x_mid + max_range])
    ax.set_ylim3d([y_mid - max_range, y_mid + max_range])
    ax.set_zlim3d([z_mid - max_range, z_mid + max_range])
