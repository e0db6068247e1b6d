from setuptools import setup

with open("README.md", 'r') as f:
    long_description = f.read()

setup(
   name='tlock-ibe',
   version='1.0',
   description='Identity-based timelock encryption against the drand beacon',
   license="MIT",
   long_description=long_description,
   long_description_content_type="text/markdown",
   packages=['tlock'],  # import name
   python_requires='>=3.8',
   install_requires=[
        'py_ecc>=7.0.0',
       ], #external packages as dependencies
   extras_require={
        'test': ['pytest>=7.0'],
        'bench': ['numpy'],
       },
)
