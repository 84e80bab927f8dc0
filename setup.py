from setuptools import setup, find_packages

setup(
    name="cachesim",
    version="0.1",
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.8',
    install_requires=[
        'numpy',
        'matplotlib',
        'PyQt5',
        'pyqtgraph'
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'cachesim=cachesim.cli:main',
            'cachesim-gui=cachesim.gui.main_interface:main',
        ],
    },
)
