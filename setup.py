from setuptools import setup, find_packages

setup(
    name='b2client',
    version='0.1.0',
    description='Client for the Backblaze B2 native API with transparent re-authorization',
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.10',
    install_requires=[
        'requests',
        'urllib3',
        'pydantic>=2'
    ],
    extras_require={
        'dev': [
            'pytest',
            'requests_mock',
            'pytest-mock'
        ],
    },
)
