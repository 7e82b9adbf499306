from setuptools import setup, find_packages
import io
import os
import re

here = os.path.abspath(os.path.dirname(__file__))

def read(*filenames, **kwargs):
    encoding = kwargs.get('encoding', 'utf-8')
    sep = kwargs.get('sep', '\n')
    buf = []
    for filename in filenames:
        with io.open(os.path.join(here, filename), encoding=encoding) as f:
            buf.append(f.read())
    return sep.join(buf)

long_description = read('README.rst')

# Read the version without importing the package and its dependencies.
version = re.search(r"^__version__ = '([^']+)'", read('duomark/__init__.py'), re.M).group(1)

setup(
    name='duomark',
    version=version,
    license='MIT',
    author='Brendan Abel',
    tests_require=['pytest'],
    install_requires=[
        'beautifulsoup4',
    ],
    author_email='007brendan@gmail.com',
    description='Markdown to HTML and HTML back to Markdown, for live editors.',
    long_description=long_description,
    packages=find_packages(exclude=['tests']),
    include_package_data=True,
    platforms='any',
    python_requires='>=3.7',
    classifiers=[
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Development Status :: 4 - Beta',
        'Natural Language :: English',
        'Environment :: Web Environment',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Topic :: Software Development :: Libraries :: Python Modules',
        'Topic :: Internet :: WWW/HTTP :: Dynamic Content',
        'Topic :: Text Processing :: Markup',
        'Topic :: Text Processing :: Markup :: HTML',
        ],
    extras_require={
        'testing': ['pytest'],
    }
)
