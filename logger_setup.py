# logger_setup.py

import logging
import os
import json
import constants

def setup_logging(config_path='config.json'):
    """
    Routes the typer's log records to the console and to runs/<run_id>/typer.log.

    What ends up there: swarm creation and resizes (INFO), keystrokes, backspaces
    and particle arrivals (DEBUG), throttled per-behavior swarm counts from the
    frame loop (DEBUG), and reclassify misses (WARNING). Records go to the
    "particle_typer" logger only, so pygame's output stays out of the run log.

    Data Contract:
    - Inputs: config_path (str) - Path to config.json; reads 'run_id' and the
      'logging' section ('level', 'format').
    - Outputs: The configured logging.Logger.
    - Side Effects: Creates runs/<run_id>/ and replaces any handlers a previous
      call attached, so calling it twice does not duplicate output.
    """
    with open(config_path, 'r') as f:
        config = json.load(f)

    run_id = config['run_id']
    log_config = config['logging']

    # --- The typer's own logger, not the root logger ---
    logger = logging.getLogger(constants.LOGGER_NAME)
    logger.setLevel(log_config['level'])

    # --- Prevent logs from propagating to the root logger ---
    logger.propagate = False

    # --- One directory per run ---
    log_dir = os.path.join('runs', run_id)
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, 'typer.log')

    # --- Create formatter and handlers ---
    formatter = logging.Formatter(log_config['format'])

    file_handler = logging.FileHandler(log_file)
    file_handler.setFormatter(formatter)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)

    # --- Add handlers to the logger ---
    # Close handlers left over from an earlier call before replacing them
    if logger.hasHandlers():
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()
    logger.addHandler(file_handler)
    logger.addHandler(stream_handler)

    logger.info(f"Logging initialized. Run ID: {run_id}. Log file: {log_file}")
    return logger
