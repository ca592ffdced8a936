# -*- coding: utf-8 -*-
#
#    RegtestMultisig - Multisignature Regtest Bootstrap Tool
#    Transport for the JSON-RPC interface of bitcoind
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
import requests
from decimal import Decimal
from urllib.parse import quote
from regtestmultisig.services.baseclient import *

_logger = logging.getLogger(__name__)


def _json_default(value):
    if isinstance(value, Decimal):
        return float(value)
    raise TypeError("Object of type %s is not JSON serializable" % type(value).__name__)


class JsonRpcTransport(BaseTransport):
    """
    Send commands to bitcoind over HTTP with the JSON-RPC protocol. Results are rendered as text the same way
    bitcoin-cli does, so both transports can be used interchangeably.
    """

    def __init__(self, *args, **kwargs):
        super(JsonRpcTransport, self).__init__(*args, **kwargs)
        self.base_url = "http://%s:%s" % (self.host, self.port)
        self._request_id = 0

    def url(self, wallet=None):
        if wallet:
            return "%s/wallet/%s" % (self.base_url, quote(wallet, safe=''))
        return self.base_url + '/'

    def execute(self, method, params=None, wallet=None):
        self._request_id += 1
        post_data = json.dumps({
            'jsonrpc': '1.0',
            'id': self._request_id,
            'method': method,
            'params': params or [],
        }, default=_json_default)
        url = self.url(wallet)
        _logger.info("Url post request %s method %s" % (url, method))
        try:
            resp = requests.post(url, data=post_data, auth=(self.rpcuser, self.rpcpassword), timeout=self.timeout,
                                 headers={'Content-Type': 'application/json'})
        except requests.exceptions.RequestException as e:
            raise RpcError(method, "Could not connect to %s: %s" % (self.base_url, e))

        resp_text = resp.text
        if len(resp_text) > 1000:
            resp_text = resp_text[:970] + '... truncated, length %d' % len(resp_text)
        _logger.debug("Response [%d] %s" % (resp.status_code, resp_text))
        if resp.status_code in [401, 403]:
            raise RpcError(method, "Authorization failed, response [%d]" % resp.status_code)
        try:
            data = json.loads(resp.text)
        except ValueError:
            raise RpcError(method, "Invalid response [%d] %s" % (resp.status_code, resp_text))
        if data.get('error'):
            error = data['error']
            message = error.get('message', '') if isinstance(error, dict) else str(error)
            raise RpcError(method, message)
        result = data.get('result')
        if result is None:
            return ''
        if isinstance(result, str):
            return result
        return json.dumps(result, indent=2)
