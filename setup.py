# -*- coding: utf-8 -*-
"""
    socks5.py
    ~~~~~~~~~
    Threaded SOCKS5 proxy server with username/password authentication
    and transparent TCP relay.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
from setuptools import setup, find_packages

VERSION = (0, 1, 0)
__version__ = '.'.join(map(str, VERSION[0:3]))
__description__ = '''Threaded SOCKS5 proxy server with username/password
    authentication and transparent TCP relay.'''
__author__ = 'Abhinav Singh'
__author_email__ = 'mailsforabhinav@gmail.com'
__license__ = 'BSD'

if __name__ == '__main__':
    setup(
        name='socks5.py',
        version=__version__,
        author=__author__,
        author_email=__author_email__,
        description=__description__,
        long_description=open(
            'README.md', 'r', encoding='utf-8').read().strip(),
        long_description_content_type='text/markdown',
        license=__license__,
        python_requires='>=3.7',
        zip_safe=False,
        packages=find_packages(exclude=['tests', 'tests.*']),
        package_data={'socks5d': ['py.typed']},
        install_requires=open('requirements.txt', 'r').read().strip().split(),
        extras_require={
            'testing': open('requirements-testing.txt', 'r').read().strip().split(),
        },
        entry_points={
            'console_scripts': [
                'socks5 = socks5d:entry_point'
            ]
        },
        classifiers=[
            'Development Status :: 3 - Alpha',
            'Environment :: Console',
            'Environment :: No Input/Output (Daemon)',
            'Intended Audience :: Developers',
            'Intended Audience :: System Administrators',
            'License :: OSI Approved :: BSD License',
            'Operating System :: MacOS',
            'Operating System :: POSIX :: Linux',
            'Operating System :: Microsoft :: Windows',
            'Programming Language :: Python :: 3 :: Only',
            'Programming Language :: Python :: 3',
            'Topic :: Internet',
            'Topic :: Internet :: Proxy Servers',
            'Topic :: System :: Networking',
            'Typing :: Typed',
        ],
        keywords=(
            'socks, socks5, proxy, socks5 proxy server, proxy server, '
            'tcp relay, Python3'
        )
    )
