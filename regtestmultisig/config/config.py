# -*- coding: utf-8 -*-
#
#    RegtestMultisig - Multisignature Regtest Bootstrap Tool
#    CONFIG - Configuration settings
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

import os
import configparser
from pathlib import Path

# General defaults
TYPE_TEXT = str
TYPE_INT = int
LOGLEVEL = 'WARNING'
RTM_VERSION = '0.1.0'

# File locations
RTM_CONFIG_FILE = ''
RTM_INSTALL_DIR = Path(__file__).parents[1]
RTM_DATA_DIR = ''
RTM_LOG_FILE = ''

# Main
ENABLE_RTM_LOGGING = True

# Node connection
DEFAULT_RPC_HOST = '127.0.0.1'
DEFAULT_RPC_PORT = None  # Use port of network definition
DEFAULT_RPC_USER = 'user'
DEFAULT_RPC_PASSWORD = 'pass'
DEFAULT_WALLET_NAME = 'caravan_test_wallet'
DEFAULT_TRANSPORT = 'cli'
BITCOIN_CLI_PATH = 'bitcoin-cli'
TIMEOUT_REQUESTS = 30
NODE_MAX_ATTEMPTS = 10
NODE_POLL_INTERVAL = 1.0

# Networks
DEFAULT_NETWORK = 'regtest'

# Mnemonics
DEFAULT_LANGUAGE = 'english'
DEFAULT_KEY_STRENGTH = 256
SUPPORTED_KEY_STRENGTHS = [128, 160, 192, 224, 256]

# Keys / Scripts
HARDENED_OFFSET = 0x80000000
MULTISIG_MAX_KEYS = 15
# Account level of BIP48 native segwit multisig path, cosigner index is used as account index
KEY_PATH_MULTISIG_ACCOUNT = "m/48'/{coin_type}'/{cosigner}'/2'"
KEY_ORDERS = ['derivation', 'lexicographic']
DEFAULT_KEY_ORDER = 'derivation'

# Bootstrap
COINBASE_MATURITY = 100
DEFAULT_SIGNATURES_REQUIRED = 2
DEFAULT_COSIGNER_COUNT = 3
DEFAULT_DEPOSIT_AMOUNT = 10
DEFAULT_HISTORY_COUNT = 5
DEFAULT_HISTORY_AMOUNT = 1


def read_config():
    config = configparser.ConfigParser()

    def config_get(section, var, fallback, is_boolean=False):
        try:
            if is_boolean:
                val = config.getboolean(section, var, fallback=fallback)
            else:
                val = config.get(section, var, fallback=fallback)
            return val
        except (ValueError, configparser.Error):
            return fallback

    global RTM_CONFIG_FILE, RTM_DATA_DIR, RTM_LOG_FILE, LOGLEVEL, ENABLE_RTM_LOGGING
    global DEFAULT_RPC_HOST, DEFAULT_RPC_PORT, DEFAULT_RPC_USER, DEFAULT_RPC_PASSWORD, DEFAULT_WALLET_NAME
    global DEFAULT_TRANSPORT, BITCOIN_CLI_PATH, TIMEOUT_REQUESTS, DEFAULT_NETWORK
    global DEFAULT_KEY_STRENGTH, DEFAULT_KEY_ORDER

    # Read settings from configuration file provided in OS environment or ~/.regtestmultisig/ directory
    config_file_name = os.environ.get('RTM_CONFIG_FILE')
    if not config_file_name:
        RTM_CONFIG_FILE = Path('~/.regtestmultisig/config.ini').expanduser()
    else:
        RTM_CONFIG_FILE = Path(config_file_name)
        if not RTM_CONFIG_FILE.is_absolute():
            RTM_CONFIG_FILE = Path(Path.home(), '.regtestmultisig', RTM_CONFIG_FILE)
        if not RTM_CONFIG_FILE.exists():
            RTM_CONFIG_FILE = Path(RTM_INSTALL_DIR, 'data', config_file_name)
        if not RTM_CONFIG_FILE.exists():
            raise IOError('RegtestMultisig configuration file not found: %s' % str(RTM_CONFIG_FILE))
    data = config.read(str(RTM_CONFIG_FILE))
    RTM_DATA_DIR = Path(config_get('locations', 'data_dir', fallback='~/.regtestmultisig')).expanduser()

    # Log settings
    ENABLE_RTM_LOGGING = config_get('logs', 'enable_logging', fallback=True, is_boolean=True)
    RTM_LOG_FILE = Path(RTM_DATA_DIR, config_get('logs', 'log_file', fallback='regtestmultisig.log'))
    LOGLEVEL = config_get('logs', 'loglevel', fallback=LOGLEVEL)

    # Node settings
    DEFAULT_RPC_HOST = config_get('node', 'host', fallback=DEFAULT_RPC_HOST)
    port = config_get('node', 'port', fallback=DEFAULT_RPC_PORT)
    DEFAULT_RPC_PORT = int(port) if port else None
    DEFAULT_RPC_USER = config_get('node', 'rpcuser', fallback=DEFAULT_RPC_USER)
    DEFAULT_RPC_PASSWORD = config_get('node', 'rpcpassword', fallback=DEFAULT_RPC_PASSWORD)
    DEFAULT_WALLET_NAME = config_get('node', 'wallet_name', fallback=DEFAULT_WALLET_NAME)
    DEFAULT_TRANSPORT = config_get('node', 'transport', fallback=DEFAULT_TRANSPORT)
    BITCOIN_CLI_PATH = config_get('node', 'cli_path', fallback=BITCOIN_CLI_PATH)
    TIMEOUT_REQUESTS = int(config_get('node', 'timeout', fallback=TIMEOUT_REQUESTS))
    DEFAULT_NETWORK = config_get('node', 'network', fallback=DEFAULT_NETWORK)

    # Bootstrap settings
    DEFAULT_KEY_STRENGTH = int(config_get('bootstrap', 'strength', fallback=DEFAULT_KEY_STRENGTH))
    DEFAULT_KEY_ORDER = config_get('bootstrap', 'key_order', fallback=DEFAULT_KEY_ORDER)

    if not data:
        return False
    return True


# Initialize settings
read_config()
