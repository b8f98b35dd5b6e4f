from setuptools import setup, find_packages
import re

# Read version from rolpagos/__init__.py
with open('rolpagos/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='rol-pagos',
    version=version,
    packages=find_packages(include=['rolpagos', 'rolpagos.*']),
    package_data={
        'rolpagos.sdk': ['legal_rules/*.yaml'],
    },
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
        'rich>=13.0',
    ],
    extras_require={
        'mcp': [
            'mcp[cli]>=1.0.0,<2',
        ],
        'test': [
            'pytest>=7.0',
            'mcp[cli]>=1.0.0,<2',
        ],
    },
    entry_points={
        'console_scripts': [
            'rol-pagos=rolpagos.cli.__main__:main',
            'rol-pagos-mcp=rolpagos.mcp.server:run_server',
        ],
    },
    author='Personal',
    description='Monthly payroll statements (rol de pagos) under Ecuadorian labor law.',
    python_requires='>=3.10',
)
