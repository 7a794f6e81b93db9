from pathlib import Path

from setuptools import find_packages, setup

setup(
    name='particlestream',
    version='1.0.0',
    packages=find_packages(include=['particlestream', 'particlestream.*']),
    license='GPLv3',
    description='Streaming reader and analysis framework for binary particle output of transport simulations',
    long_description=(Path(__file__).parent / 'README.rst').read_text(),
    keywords=['heavy-ion', 'transport', 'particles', 'binary'],
    classifiers=[
        'Intended Audience :: Science/Research',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Scientific/Engineering :: Physics',
        'License :: OSI Approved :: GNU General Public License v3 (GPLv3)',
    ],
    python_requires='>=3.8',
    entry_points={
        'console_scripts': [
            'run_particle_analysis = particlestream.analysis.run:main',
            'store_particle_data = particlestream.store_particle_data:main',
        ],
    },
    install_requires=['numpy', 'tables>=3.3.0', 'progressbar2>=3.7.0'],
    extras_require={'dev': ['Sphinx', 'ruff', 'coverage'], 'test': ['mock']},
)
