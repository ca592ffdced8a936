# -*- coding: utf-8 -*-
#
#    RegtestMultisig - Multisignature Regtest Bootstrap Tool
#    Transport executing commands with the bitcoin-cli program
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

import json
import subprocess
from decimal import Decimal
from regtestmultisig.services.baseclient import *

_logger = logging.getLogger(__name__)


def cli_argument(value):
    """
    Format a parameter as bitcoin-cli argument: strings are passed as is, other values as JSON

    >>> cli_argument(False)
    'false'
    >>> cli_argument(['a', 1])
    '["a", 1]'

    :param value: Parameter value
    :type value: str, int, float, bool, Decimal, list, dict

    :return str:
    """
    if isinstance(value, str):
        return value
    if isinstance(value, Decimal):
        return str(value)
    return json.dumps(value)


class BitcoinCliTransport(BaseTransport):
    """
    Run commands with bitcoin-cli and capture output. The program is started without a shell, so parameters do not
    need quoting.
    """

    def __init__(self, cli_path=BITCOIN_CLI_PATH, **kwargs):
        self.cli_path = cli_path
        super(BitcoinCliTransport, self).__init__(**kwargs)

    def command(self, method, params=None, wallet=None):
        cmd = [self.cli_path]
        if self.network.cli_flag:
            cmd.append(self.network.cli_flag)
        cmd += ['-rpcconnect=%s' % self.host, '-rpcport=%s' % self.port, '-rpcuser=%s' % self.rpcuser,
                '-rpcpassword=%s' % self.rpcpassword]
        if wallet:
            cmd.append('-rpcwallet=%s' % wallet)
        cmd.append(method)
        cmd += [cli_argument(p) for p in (params or [])]
        return cmd

    def execute(self, method, params=None, wallet=None):
        cmd = self.command(method, params, wallet)
        _logger.info("Executing: %s %s" % (method, ' '.join(cmd[cmd.index(method) + 1:])))
        try:
            proc = subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE, universal_newlines=True,
                                  timeout=self.timeout)
        except (OSError, subprocess.TimeoutExpired) as e:
            raise RpcError(method, "Could not execute %s: %s" % (self.cli_path, e))
        if proc.returncode != 0:
            raise RpcError(method, proc.stderr or proc.stdout)
        _logger.debug("Response %s" % proc.stdout.strip()[:1000])
        return proc.stdout
