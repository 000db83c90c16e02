#!/usr/bin/env python
# License: BSD 3 clause
from setuptools import find_packages, setup

# Get version without importing, which avoids dependency issues
exec(compile(open('fsio/version.py').read(), 'fsio/version.py', 'exec'))


def readme():
    with open('README.rst') as f:
        return f.read()


def requirements():
    req_path = 'requirements.txt'
    with open(req_path) as f:
        reqs = f.read().splitlines()
    return reqs


setup(name='fsio',
      version=__version__,  # noqa: F821
      description=('Read, write and count labeled feature datasets in LibSVM, '
                   'CSV and WEKA ARFF formats for feature selection.'),
      long_description=readme(),
      keywords='feature-selection libsvm arff csv contingency',
      license='BSD 3 clause',
      packages=find_packages(exclude=['tests', 'examples']),
      entry_points={'console_scripts':
                    ['fsio_convert = fsio.utils.commandline.convert:main',
                     'fsio_contingency = fsio.utils.commandline.contingency:main']},
      install_requires=requirements(),
      extras_require={'test': ['pytest']},
      python_requires='>=3.8',
      classifiers=['Intended Audience :: Science/Research',
                   'Intended Audience :: Developers',
                   'License :: OSI Approved :: BSD License',
                   'Programming Language :: Python',
                   'Topic :: Software Development',
                   'Topic :: Scientific/Engineering',
                   'Operating System :: Microsoft :: Windows',
                   'Operating System :: POSIX',
                   'Operating System :: Unix',
                   'Operating System :: MacOS',
                   'Programming Language :: Python :: 3',
                   'Programming Language :: Python :: 3.8',
                   'Programming Language :: Python :: 3.9',
                   'Programming Language :: Python :: 3.10',
                   ],
      zip_safe=False)
