from setuptools import find_packages, setup

setup(
    name='dwfkit',
    version='0.1.0',

    install_requires=['numpy>=1.21',
                      'pyyaml',
                      'schema',
                      'versioningit'],

    extras_require={'test': ['pytest',
                             'hypothesis']},

    description=("Instrument configuration and acquisition layer for "
                 "Digilent WaveForms devices: oscilloscope, waveform and "
                 "pattern generators, supplies, multimeter, logic analyzer, "
                 "static I/O and UART/SPI/I2C buses."),

    license='MIT',

    package_dir={'': 'src'},
    packages=find_packages('src'),

    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Science/Research',
        'Programming Language :: Python :: 3 :: Only',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        ],

    python_requires=">=3.10",

    keywords='Digilent WaveForms oscilloscope logic analyzer instrument control',
    )
