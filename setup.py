from setuptools import setup

setup(
   name='turbineflow',
   version='0.1.0',
   description='optimal part layout and flow rates for multiblock industrial turbines',
   author='',
   author_email='',
   packages=['turbineflow'],
   install_requires=[
    "numpy",
    "plotly",
   ],
   extras_require={
    "test": ["pytest"],
   },
)
