from glob import glob
from setuptools import setup


setup(
    name='fxcalc',
    version='0.1.0',
    description='Programmable scientific calculator emulator',
    install_requires=[
        'regex',
        'prompt_toolkit',
    ],
    packages=['fxcalc'],
    package_dir={'': 'src'},
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        "Programming Language :: Python :: 3",
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
        ],
    },
    scripts=glob('bin/*'),
    license='ISC',
)
