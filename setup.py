from setuptools import setup

setup(
    name='stridecast',
    version='0.0.1',
    description='Shape broadcasting and stride synthesis for strided array views',
    author='Philip Thomsen',
    license='MIT',
    packages=['stridecast'],
    python_requires='>=3.10',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
)
