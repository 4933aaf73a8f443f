"""
Command-line interface.

Runs the tick pipeline headless and reports buffer/mesh statistics.
Optionally renders the final frame off-screen with PyVista.

Usage:
    $ python -m phasetube --ticks 600 --screenshot frame.png
"""
import argparse
import logging
import time
from typing import List, Optional

from phasetube.config import ConfigError, load_config
from phasetube.controller.frame_driver import FrameDriver
from phasetube.logging_config import setup_logging

logger = logging.getLogger("phasetube.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="phasetube",
        description="Animate the FitzHugh-Nagumo trajectory as a 3D tube (headless run).",
    )
    parser.add_argument("--ticks", type=int, default=300, help="number of frames to simulate")
    parser.add_argument("--config", default=None, help="JSON file with configuration overrides")
    parser.add_argument("--log-level", default="INFO", help="logging level (DEBUG, INFO, ...)")
    parser.add_argument("--log-file", default=None, help="also write the log to this file")
    parser.add_argument("--screenshot", default=None, help="render the final frame to this image file")
    return parser


def run(ticks: int, driver: FrameDriver) -> float:
    """Runs `ticks` frames and returns the wall time per tick in ms."""
    start = time.perf_counter()
    for _ in range(ticks):
        driver.on_tick()
    elapsed = time.perf_counter() - start
    return 1000.0 * elapsed / max(ticks, 1)


def render_screenshot(driver: FrameDriver, filename: str) -> None:
    import pyvista as pv

    from phasetube.controller.scene import AXES, build_axis_arrow, build_grid_plane
    from phasetube.config import FIELD_OF_VIEW, GRID_OPACITY, TRAJECTORY_OPACITY
    from phasetube.view.widgets.vtk_utils import VtkUtils, COLORS_ARRAY

    utils = VtkUtils()
    plotter = pv.Plotter(off_screen=True, window_size=(1200, 800))
    plotter.set_background("#14141e")

    for axis in AXES:
        arrow = build_axis_arrow((0.0, 0.0, 0.0), axis.direction)
        plotter.add_mesh(utils.mesh_to_polydata(arrow), color=axis.color)
    plotter.add_mesh(utils.mesh_to_polydata(build_grid_plane()), color="gray", opacity=GRID_OPACITY)

    if not driver.mesh.is_empty:
        plotter.add_mesh(
            utils.mesh_to_polydata(driver.mesh),
            scalars=COLORS_ARRAY,
            rgb=True,
            opacity=TRAJECTORY_OPACITY,
        )

    orbit = driver.camera
    plotter.camera.position = orbit.position().to_tuple()
    plotter.camera.focal_point = (0.0, 0.0, 0.0)
    plotter.camera.up = orbit.up().to_tuple()
    plotter.camera.view_angle = FIELD_OF_VIEW

    plotter.screenshot(filename)
    plotter.close()
    logger.info(f"Saved screenshot to: {filename}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level, log_file=args.log_file)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    driver = FrameDriver(config)
    ms_per_tick = run(args.ticks, driver)

    state = driver.state
    logger.info(
        f"{driver.tick_count} ticks: v={state.v:.4f}, w={state.w:.4f}, t={state.t:.2f}; "
        f"{len(driver.trajectory)} points, {driver.mesh.n_vertices} vertices, "
        f"{driver.mesh.n_triangles} triangles ({ms_per_tick:.2f} ms/tick)"
    )

    if args.screenshot:
        render_screenshot(driver, args.screenshot)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
