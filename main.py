# main.py
"""
Main entry point for the Particle Portrait demo.

This script orchestrates the whole lifecycle:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Opens the window, loads and samples the image, builds the particle field.
4. Runs the animation loop.
5. Handles clean shutdown.
"""
import logging
import sys
import cProfile
import pstats
import io

from utils import setup_logging, load_config, resolve_path, setting
from constants import DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT, DEFAULT_IMAGE_PATH, FPS
from errors import ParticlePortraitError


def main(config_path: str = 'config.json') -> int:
    """
    Runs the demo. Returns a process exit code.
    """
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config(config_path)
    except Exception as e:
        print(f"FATAL: Could not load {config_path}. Error: {e}")
        return 1

    setup_logging(config)

    logging.info("--- Particle Portrait Starting ---")

    effect_params = config.get('effect') or {}
    image_params = config.get('image') or {}
    run_params = config.get('run_control') or {}
    vis_params = config.get('visualization') or {}

    from config import EffectConfig
    from loop import AnimationLoop
    from sampler import load_image
    from simulation import Simulation
    from visualization import Visualizer

    width = setting(vis_params, 'width', DEFAULT_WINDOW_WIDTH)
    height = setting(vis_params, 'height', DEFAULT_WINDOW_HEIGHT)

    # --- Component Initialization ---
    # Any failure here is fatal for the effect: no partial field is shown.
    visualizer = None
    try:
        effect_config = EffectConfig.from_params(effect_params, width, height)
        visualizer = Visualizer(effect_config.width, effect_config.height)
        image = load_image(resolve_path(config_path, setting(image_params, 'path', DEFAULT_IMAGE_PATH)))
        simulation = Simulation.from_image(image, visualizer.canvas, effect_config)
    except (ParticlePortraitError, ValueError) as e:
        logging.critical(f"Setup failed: {e}")
        if visualizer is not None:
            visualizer.close()
        return 1

    log_throttle = max(int(setting(run_params, 'log_throttle_steps', 100)), 1)
    max_steps = run_params.get('max_steps')

    def frame():
        if not visualizer.handle_events(simulation):
            loop.stop()
        simulation.frame(visualizer.canvas)
        visualizer.present()

        if simulation.frames % log_throttle == 0:
            logging.debug(
                f"Frame {simulation.frames} | Mean displacement: "
                f"{simulation.field.mean_displacement():.4f}"
            )

    loop = AnimationLoop(frame, fps=setting(run_params, 'fps', FPS), log_throttle=log_throttle)

    # --- Profiler Setup ---
    profiler = cProfile.Profile()
    profiler.enable()
    loop.run(max_frames=max_steps)
    profiler.disable()

    visualizer.close()
    logging.info("Animation loop finished.")

    logging.info("--- Performance Profile ---")
    s = io.StringIO()
    # Sort by cumulative time spent in the function
    stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
    stats.print_stats(20)
    logging.info(f"\n{s.getvalue()}")

    logging.info("--- Particle Portrait Shutting Down ---")
    return 0


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
