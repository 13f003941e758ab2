from setuptools import setup, find_packages

setup(
    name="suffix_tree_package",
    version="0.1.0",
    description="Online suffix tree construction with Ukkonen's algorithm",
    packages=find_packages(where='.', include=['suffix_tree_package', 'suffix_tree_package.*']),
    python_requires='>=3.10',
    install_requires=[
        'numpy>=1.19.0'
    ],
    extras_require={
        # benchmark.py at the project root
        'benchmark': ['pandas', 'matplotlib'],
        'test': ['pytest'],
    },
    zip_safe=False
)
