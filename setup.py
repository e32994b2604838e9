from setuptools import setup, find_packages

with open("Readme.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="endpoint-license-probe",
    version="1.0.0",
    author="Watchman",
    author_email="support@watchman.bj",
    description='Sonde collectant les informations de licence d\'un poste Windows et les exportant en CSV et JSON.',
    long_description=long_description,
    long_description_content_type='text/markdown',
    include_package_data=True,
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires='>=3.8',
    install_requires=[
        "configparser>=5.3.0",
        "pywin32>=306; platform_system=='Windows'",
        "WMI>=1.5.1; platform_system=='Windows'",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "pytest-mock>=3.10.0",
            "black>=23.0.0",
            "flake8>=6.0.0",
        ],
    },

    entry_points='''
        [console_scripts]
        endpoint-license-probe=probe.main:main
    '''
)
