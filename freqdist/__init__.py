__project__      = 'freqdist'
__version__      = '0.1'
__keywords__     = ['frequency', 'distribution', 'counter', 'vocabulary']
__author__       = 'Dave Jones'
__author_email__ = 'dave@waveform.org.uk'
__url__          = 'https://github.com/waveform80/freqdist'
__platforms__    = 'ALL'

__requires__ = ['chardet', 'ruamel.yaml', 'blessings', 'tqdm', 'humanize']
__extra_requires__ = {
    'doc':  ['sphinx'],
    'test': ['pytest', 'coverage'],
}

__classifiers__ = [
    'Development Status :: 3 - Alpha',
    'Environment :: Console',
    'Intended Audience :: Developers',
    'License :: OSI Approved :: GNU General Public License v2 or later (GPLv2+)',
    'Operating System :: OS Independent',
    'Programming Language :: Python :: 3',
]

__entry_points__ = {
    'console_scripts': [
        'freqdist = freqdist.ui.cli:main',
    ],
}
