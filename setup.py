from setuptools import setup, find_packages

setup(
    name='valuegraph',
    version='1.0.0',
    description='Draw any Python value as a Graphviz directed graph, for debugging',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=[
        'graphviz>=0.20',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    python_requires='>=3.8',
)
