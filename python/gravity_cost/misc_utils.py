"""
@package gravity_cost
@file misc_utils.py
@author Sebastien Kleff
@license License BSD-3-Clause
@copyright Copyright (c) 2020, New York University and Max Planck Gesellschaft.
@date 2022-05-12
@brief Logging helpers shared by all modules of the package
"""

import logging
import sys


GLOBAL_LOG_LEVEL = logging.INFO
GLOBAL_LOG_FORMAT = logging.Formatter('%(asctime)s [%(levelname)s] %(name)s:%(lineno)s -> %(funcName)s() : %(message)s')


class CustomLogger:
    '''
    Thin wrapper around a named logger with a stream handler
      e.g. logger = CustomLogger(__name__, GLOBAL_LOG_LEVEL, GLOBAL_LOG_FORMAT).logger
    '''
    def __init__(self, module_name, log_level=GLOBAL_LOG_LEVEL, log_format=GLOBAL_LOG_FORMAT):
        self.logger = logging.getLogger(module_name)
        self.logger.setLevel(log_level)
        # Avoid stacking handlers when a module is re-imported
        if(not self.logger.handlers):
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(log_format)
            self.logger.addHandler(handler)
        self.logger.propagate = False
