# -*- coding: utf-8 -*-
#
#    RegtestMultisig - Multisignature Regtest Bootstrap Tool
#    BOOTSTRAP - Create, fund and use a multisignature address on a regtest node
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

import enum
import json
from collections import OrderedDict
from regtestmultisig.main import *
from regtestmultisig.mnemonic import Mnemonic, new_seed
from regtestmultisig.keys import HDKey, BKeyError, derive_accounts, neutered_export
from regtestmultisig.scripts import MultisigScript, script_to_string
from regtestmultisig.networks import Network

_logger = logging.getLogger(__name__)

# Coinbase outputs can be spent after 100 confirmations, so one extra block is needed
INITIAL_BLOCKS = COINBASE_MATURITY + 1


class BootstrapState(enum.Enum):
    WAITING_FOR_NODE = 'waiting_for_node'
    PROVISIONING_WALLET = 'provisioning_wallet'
    DERIVING_KEYS = 'deriving_keys'
    BUILDING_MULTISIG = 'building_multisig'
    MINING_INITIAL_COINS = 'mining_initial_coins'
    FUNDING_MULTISIG = 'funding_multisig'
    CONFIRMING_DEPOSIT = 'confirming_deposit'
    GENERATING_HISTORY = 'generating_history'
    DONE = 'done'
    FAILED = 'failed'


STATE_ORDER = [
    BootstrapState.WAITING_FOR_NODE,
    BootstrapState.PROVISIONING_WALLET,
    BootstrapState.DERIVING_KEYS,
    BootstrapState.BUILDING_MULTISIG,
    BootstrapState.MINING_INITIAL_COINS,
    BootstrapState.FUNDING_MULTISIG,
    BootstrapState.CONFIRMING_DEPOSIT,
    BootstrapState.GENERATING_HISTORY,
]


class BootstrapError(Exception):
    """
    Bootstrap failed. The state in which the error occurred is available as 'state', the original exception as
    'cause'.
    """

    def __init__(self, state, cause=None, msg=''):
        self.state = state
        self.cause = cause
        self.msg = msg or "Bootstrap failed in state %s: %s" % (state.name, cause)
        _logger.error(self.msg)

    def __str__(self):
        return self.msg


class BootstrapConfig(object):
    """
    Settings of a bootstrap run. Defaults are read from the configuration file.
    """

    def __init__(self, wallet_name=DEFAULT_WALLET_NAME, network=DEFAULT_NETWORK,
                 sigs_required=DEFAULT_SIGNATURES_REQUIRED, cosigner_count=DEFAULT_COSIGNER_COUNT,
                 key_path=KEY_PATH_MULTISIG_ACCOUNT, key_order=DEFAULT_KEY_ORDER, strength=DEFAULT_KEY_STRENGTH,
                 mnemonic=None, passphrase='', deposit_amount=DEFAULT_DEPOSIT_AMOUNT,
                 history_count=DEFAULT_HISTORY_COUNT, history_amount=DEFAULT_HISTORY_AMOUNT,
                 node_max_attempts=NODE_MAX_ATTEMPTS, node_poll_interval=NODE_POLL_INTERVAL):
        """
        Create bootstrap configuration

        :param wallet_name: Name of wallet on node used for mining and funding
        :type wallet_name: str
        :param network: Network name, only regtest is supported
        :type network: str
        :param sigs_required: Number of signatures required, default is 2
        :type sigs_required: int
        :param cosigner_count: Number of cosigner keys, default is 3
        :type cosigner_count: int
        :param key_path: Account key path template with {cosigner} placeholder
        :type key_path: str
        :param key_order: Order of keys in redeem script: 'derivation' (cosigner index) or 'lexicographic'
        :type key_order: str
        :param strength: Entropy strength in bits of new mnemonic
        :type strength: int
        :param mnemonic: Use this mnemonic sentence instead of generating a new one
        :type mnemonic: str
        :param passphrase: BIP39 passphrase
        :type passphrase: str
        :param deposit_amount: Amount in BTC sent to the multisig address
        :type deposit_amount: int, float, Decimal
        :param history_count: Number of history transactions to create
        :type history_count: int
        :param history_amount: Amount in BTC of every history transaction
        :type history_amount: int, float, Decimal
        :param node_max_attempts: Number of connection attempts before giving up
        :type node_max_attempts: int
        :param node_poll_interval: Seconds between connection attempts
        :type node_poll_interval: float
        """
        if key_order not in KEY_ORDERS:
            raise ValueError("Unknown key order '%s', use one of %s" % (key_order, KEY_ORDERS))
        self.network = Network(network)
        if self.network.name != 'regtest':
            raise ValueError("Bootstrap needs a regtest node to mine coins, network %s is not supported" %
                             self.network.name)
        if cosigner_count < 1:
            raise ValueError("Number of cosigners must be 1 or more")
        if history_count < 0:
            raise ValueError("Number of history transactions cannot be negative")
        if deposit_amount <= 0 or history_amount <= 0:
            raise ValueError("Amounts must be greater than zero")
        self.wallet_name = wallet_name
        self.sigs_required = sigs_required
        self.cosigner_count = cosigner_count
        self.key_path = key_path
        self.key_order = key_order
        self.strength = strength
        self.mnemonic = mnemonic
        self.passphrase = passphrase
        self.deposit_amount = deposit_amount
        self.history_count = history_count
        self.history_amount = history_amount
        self.node_max_attempts = node_max_attempts
        self.node_poll_interval = node_poll_interval

    def __repr__(self):
        return "<BootstrapConfig(%d-of-%d, wallet=%s, network=%s)>" % \
               (self.sigs_required, self.cosigner_count, self.wallet_name, self.network.name)


class BootstrapResult(object):
    """
    Outcome of a successful bootstrap run. Use as_dict() or as_json() for the configuration to import in a
    multisig coordinator.
    """

    def __init__(self, sigs_required, xpubs, network, address, mnemonic, redeemscript=b'', key_paths=None,
                 mining_address='', funding_txid='', history_txids=None, wallet_name=''):
        self.sigs_required = sigs_required
        self.xpubs = list(xpubs)
        self.network = Network(network)
        self.address = address
        self.mnemonic = mnemonic
        self.redeemscript = redeemscript
        self.key_paths = key_paths or []
        self.mining_address = mining_address
        self.funding_txid = funding_txid
        self.history_txids = history_txids or []
        self.wallet_name = wallet_name

    def __repr__(self):
        return "<BootstrapResult(%d-of-%d, address=%s, network=%s)>" % \
               (self.sigs_required, self.total_signers, self.address, self.network.name)

    @property
    def total_signers(self):
        return len(self.xpubs)

    def as_dict(self):
        """
        Multisig configuration with extended public keys, quorum and network

        :return OrderedDict:
        """
        return OrderedDict([
            ('xpubs', list(self.xpubs)),
            ('quorum', OrderedDict([
                ('requiredSigners', self.sigs_required),
                ('totalSigners', self.total_signers),
            ])),
            ('network', self.network.name),
        ])

    def as_json(self):
        return json.dumps(self.as_dict(), indent=2)

    def info(self):
        """
        Prints bootstrap result to standard output. Includes the mnemonic sentence, only use on test networks!
        """
        print("=== MULTISIG BOOTSTRAP ===")
        print(" Network                        %s" % self.network.name)
        print(" Wallet                         %s" % self.wallet_name)
        print(" Mnemonic                       %s" % self.mnemonic)
        print(" Multisig address               %s" % self.address)
        print(" Signatures required            %d of %d" % (self.sigs_required, self.total_signers))
        if self.redeemscript:
            print(" Redeem script                  %s" % script_to_string(self.redeemscript))
        print(" Mining address                 %s" % self.mining_address)
        print(" Funding transaction            %s" % self.funding_txid)
        print("\n= Cosigner keys =")
        for n, xpub in enumerate(self.xpubs):
            path = self.key_paths[n] if n < len(self.key_paths) else ''
            print(" %-20s %s" % (path, xpub))
        if self.history_txids:
            print("\n= Transaction history =")
            for txid in self.history_txids:
                print(" %s" % txid)
        print("\n= Configuration =")
        print(self.as_json())


class MultisigBootstrap(object):
    """
    Bootstrap a multisignature environment on a regtest node.

    Runs through the states in STATE_ORDER, every state has its own handler method. If a handler fails the
    bootstrap stops in the FAILED state and a BootstrapError is raised with the state and the original error.

    Handlers only depend on the node client and the results of earlier handlers, so they can also be called
    separately.
    """

    def __init__(self, client, config=None, on_result=None):
        """
        :param client: Node client
        :type client: BitcoindClient
        :param config: Bootstrap settings, use default settings if not specified
        :type config: BootstrapConfig
        :param on_result: Function called with the BootstrapResult when bootstrap is done
        :type on_result: function
        """
        self.client = client
        self.config = config or BootstrapConfig()
        self.on_result = on_result
        self.state = None
        self.completed_states = []
        self.wallet = None
        self.mnemonic = None
        self.seed = None
        self.masterkey = None
        self.accounts = []
        self.multisig = None
        self.mining_address = None
        self.funding_txid = None
        self.history = []
        self.result = None

    def __repr__(self):
        return "<MultisigBootstrap(state=%s, %s)>" % (self.state.name if self.state else None, self.config)

    def _handler(self, state):
        return getattr(self, 'handle_' + state.value)

    def run(self):
        """
        Run all bootstrap states in order

        :return BootstrapResult:
        """
        if self.state is not None:
            raise BootstrapError(self.state, msg="Bootstrap already started, create a new MultisigBootstrap "
                                                 "object for another run")
        for state in STATE_ORDER:
            self.state = state
            _logger.info("Bootstrap state %s" % state.name)
            try:
                self._handler(state)()
            except Exception as e:
                self.state = BootstrapState.FAILED
                raise BootstrapError(state, e) from e
            self.completed_states.append(state)
        try:
            self.result = self.build_result()
            _logger.info("Bootstrap completed: %s" % self.result.as_json())
            if self.on_result:
                self.on_result(self.result)
        except Exception as e:
            self.state = BootstrapState.FAILED
            raise BootstrapError(BootstrapState.DONE, e) from e
        self.state = BootstrapState.DONE
        return self.result

    def handle_waiting_for_node(self):
        return self.client.wait_ready(self.config.node_max_attempts, self.config.node_poll_interval)

    def handle_provisioning_wallet(self):
        self.wallet = self.client.create_or_load_wallet(self.config.wallet_name)
        return self.wallet

    def handle_deriving_keys(self):
        if self.config.mnemonic:
            self.mnemonic = Mnemonic().sanitize_mnemonic(self.config.mnemonic)
            self.seed = Mnemonic().to_seed(self.mnemonic, self.config.passphrase)
        else:
            self.mnemonic, self.seed = new_seed(self.config.strength, self.config.passphrase)
        self.masterkey = HDKey.from_seed(self.seed, network=self.config.network)
        accounts = derive_accounts(self.masterkey, self.config.cosigner_count, self.config.key_path)
        if len(set(a.public_byte for a in accounts)) != len(accounts):
            raise BKeyError("Derived cosigner keys are not unique")
        if self.config.key_order == 'lexicographic':
            accounts.sort(key=lambda a: a.public_byte)
        self.accounts = accounts
        return self.accounts

    def handle_building_multisig(self):
        self.multisig = MultisigScript(self.config.sigs_required, [a.public_byte for a in self.accounts],
                                       network=self.config.network)
        return self.multisig

    def handle_mining_initial_coins(self):
        self.mining_address = self.client.call('getnewaddress')
        _logger.info("Mining %d blocks to address %s" % (INITIAL_BLOCKS, self.mining_address))
        return self.client.call('generatetoaddress', [INITIAL_BLOCKS, self.mining_address])

    def handle_funding_multisig(self):
        _logger.info("Sending %s %s to multisig address %s" %
                     (self.config.deposit_amount, self.config.network.currency_code, self.multisig.address))
        self.funding_txid = self.client.call('sendtoaddress', [self.multisig.address, self.config.deposit_amount])
        return self.funding_txid

    def handle_confirming_deposit(self):
        return self.client.call('generatetoaddress', [1, self.mining_address])

    def handle_generating_history(self):
        for n in range(self.config.history_count):
            _logger.info("Creating transaction %d/%d" % (n + 1, self.config.history_count))
            recipient = self.client.call('getnewaddress')
            txid = self.client.call('sendtoaddress', [recipient, self.config.history_amount])
            self.client.call('generatetoaddress', [1, self.mining_address])
            self.history.append(txid)
        return self.history

    def build_result(self):
        wallet_name = self.wallet.name if self.wallet else self.config.wallet_name
        return BootstrapResult(
            sigs_required=self.multisig.sigs_required,
            xpubs=[neutered_export(a) for a in self.accounts],
            network=self.config.network,
            address=self.multisig.address,
            mnemonic=self.mnemonic,
            redeemscript=self.multisig.redeemscript,
            key_paths=[a.path for a in self.accounts],
            mining_address=self.mining_address,
            funding_txid=self.funding_txid,
            history_txids=self.history,
            wallet_name=wallet_name)
