"""Rewrites the timestamps embedded in log lines to the local time
zone. Timestamp formats are described with strftime-style directives,
and a set of common log formats is recognized out of the box.
"""

from setuptools import setup, find_packages


__author__ = 'The logzen developers'
__version__ = '0.1.0'
__url__ = 'https://github.com/logzen/logzen'
__license__ = 'BSD'

desc = ('Rewrite log timestamps to the local time zone, using'
        ' strftime-style formats.')


setup(name='logzen',
      version=__version__,
      description=desc,
      long_description=__doc__,
      author=__author__,
      url=__url__,
      packages=find_packages(exclude=['*.tests', '*.tests.*']),
      install_requires=['boltons>=20.0.0', 'tzdata'],
      extras_require={'test': ['pytest']},
      entry_points={'console_scripts': ['logzen = logzen.cli:main']},
      python_requires='>=3.9',
      include_package_data=True,
      zip_safe=False,
      license=__license__,
      platforms='any',
      classifiers=[
          'Intended Audience :: Developers',
          'Intended Audience :: System Administrators',
          'Topic :: System :: Logging',
          'Topic :: Utilities',
          'License :: OSI Approved :: BSD License',
          'Programming Language :: Python :: 3',
          'Programming Language :: Python :: 3.9',
          'Programming Language :: Python :: 3.10',
          'Programming Language :: Python :: 3.11',
          'Programming Language :: Python :: 3.12',
          'Programming Language :: Python :: Implementation :: CPython',
      ]
)


"""
A brief checklist for release:

* pytest
* Bump setup.py and logzen/__init__.py version off of -dev
* git commit -a -m "bump version for x.y.z release"
* python -m build && twine upload dist/*
* git tag -a x.y.z -m "brief summary"
* write CHANGELOG
* bump setup.py version onto n+1 dev
* git commit
* git push

"""
