#!/usr/bin/env python

from setuptools import setup

setup(name='rpncalc',
      version='0.1',
      description='Console-based RPN calculator with Lua and Python extensions',
      author='Vernon Mauery',
      author_email='vernon@mauery.com',
      url='',
      packages=['rpncalc'],
      package_data={'rpncalc': ['base.lua']},
      python_requires='>=3.8',
      install_requires=[
          'mpmath',
          'pyparsing>=3.0',
          'lupa',
      ],
      extras_require={
          'test': ['pytest'],
      },
      entry_points={
          'console_scripts': ['rpncalc = rpncalc.main:main'],
      },
     )
