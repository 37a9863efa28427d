# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from setuptools import setup


setup(
  name='hobbyparse',
  version='0.0.1',
  description='A grammar combinator engine with backtracking and precedence climbing, and the HobbyScript grammar.',

  packages=['hobbyparse', 'hobbyparse.bin', 'hobbyparse.script'],
  python_requires='>=3.10',
  extras_require={'test': ['pytest']},
  entry_points={'console_scripts': ['hobby-parse=hobbyparse.bin.hobby_parse:main']},
)
