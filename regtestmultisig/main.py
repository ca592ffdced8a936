# -*- coding: utf-8 -*-
#
#    RegtestMultisig - Multisignature Regtest Bootstrap Tool
#    MAIN - Load configs and initialize logging
#    © 2026 October - 1200 Web Development <http://1200wd.com/>
#
#    This program is free software: you can redistribute it and/or modify
#    it under the terms of the GNU Affero General Public License as
#    published by the Free Software Foundation, either version 3 of the
#    License, or (at your option) any later version.
#
#    This program is distributed in the hope that it will be useful,
#    but WITHOUT ANY WARRANTY; without even the implied warranty of
#    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#    GNU Affero General Public License for more details.
#
#    You should have received a copy of the GNU Affero General Public License
#    along with this program.  If not, see <http://www.gnu.org/licenses/>.
#

# Do not remove any of the imports below, used by other files
import os
import sys
import logging
from logging.handlers import RotatingFileHandler
from regtestmultisig.config.config import *


# Initialize logging
logger = logging.getLogger('regtestmultisig')
logger.setLevel(LOGLEVEL)

if ENABLE_RTM_LOGGING:
    RTM_LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(str(RTM_LOG_FILE), maxBytes=10 * 1024 * 1024, backupCount=2)
    formatter = logging.Formatter('%(asctime)s %(levelname)s %(funcName)s(%(lineno)d) %(message)s',
                                  datefmt='%Y/%m/%d %H:%M:%S')
    handler.setFormatter(formatter)
    handler.setLevel(LOGLEVEL)
    logger.addHandler(handler)

    logger.info('REGTESTMULTISIG - MULTISIGNATURE REGTEST BOOTSTRAP')
    logger.info('Version: %s' % RTM_VERSION)
    logger.info('Read config from: %s' % RTM_CONFIG_FILE)
    logger.info('Logging to: %s' % RTM_LOG_FILE)


def add_console_logging(level=logging.INFO):
    """
    Add a console handler to the package logger, used by command line tools to show progress.

    :param level: Loglevel of console output
    :type level: int, str

    :return logging.Handler:
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter('%(levelname)s %(message)s'))
    console.setLevel(level)
    logger.addHandler(console)
    if logger.getEffectiveLevel() > level:
        logger.setLevel(level)
    return console
