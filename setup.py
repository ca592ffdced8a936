# -*- coding: utf-8 -*-
#
#    RegtestMultisig - Multisignature Regtest Bootstrap Tool
#    PyPi Setup Tool
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

from setuptools import setup
from codecs import open
import os

here = os.path.abspath(os.path.dirname(__file__))
version = '0.1.0'

# Get the long description from the relevant file
readmetxt = ''
readme_file = os.path.join(here, 'README.rst')
if os.path.exists(readme_file):
    with open(readme_file, encoding='utf-8') as f:
        readmetxt = f.read()

kwargs = {}


install_requires = [
      'requests>=2.25.0',
      'fastecdsa>=2.2.1;platform_system!="Windows"',
      'ecdsa>=0.17',
      'pycryptodome>=3.14.1',
      'mnemonic>=0.20',
]

kwargs['install_requires'] = install_requires
kwargs['extras_require'] = {
      'test': ['pytest>=7.0'],
}

setup(
      name='regtestmultisig',
      version=version,
      description='Bootstrap a multisignature wallet environment on a bitcoind regtest node',
      long_description=readmetxt,
      classifiers=[
            'Development Status :: 4 - Beta',
            'Intended Audience :: Developers',
            'License :: OSI Approved :: GNU Affero General Public License v3 or later (AGPLv3+)',
            'Natural Language :: English',
            'Operating System :: OS Independent',
            'Operating System :: POSIX',
            'Programming Language :: Python :: 3.8',
            'Programming Language :: Python :: 3.9',
            'Programming Language :: Python :: 3.10',
            'Programming Language :: Python :: 3.11',
            'Programming Language :: Python :: 3.12',
            'Topic :: Software Development :: Testing',
            'Topic :: Security :: Cryptography',
      ],
      url='http://github.com/1200wd/regtestmultisig',
      author='1200wd',
      author_email='info@1200wd.com',
      license='GNU3',
      packages=['regtestmultisig', 'regtestmultisig.config', 'regtestmultisig.services',
                'regtestmultisig.tools'],
      entry_points={
          'console_scripts': ['regtest-multisig-bootstrap=regtestmultisig.tools.bootstrap_multisig:run']
      },
      test_suite='tests',
      include_package_data=True,
      package_data={'regtestmultisig': ['data/*.example']},
      keywords='bitcoin regtest multisig segwit bip32 bip39 bip48 testing',
      zip_safe=False,
      **kwargs
)
