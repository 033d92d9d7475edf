"""
Setup script for Signal Workbench
Interactive workbench for composing synthetic signals across plot panes
"""

from setuptools import setup, find_namespace_packages
import os

# Read the long description from README
def read_long_description():
    readme_path = os.path.join(os.path.dirname(__file__), 'README.md')
    if os.path.exists(readme_path):
        with open(readme_path, 'r', encoding='utf-8') as f:
            return f.read()
    return ""

# Read requirements
def read_requirements():
    req_path = os.path.join(os.path.dirname(__file__), 'requirements.txt')
    if os.path.exists(req_path):
        with open(req_path, 'r', encoding='utf-8') as f:
            return [line.strip() for line in f if line.strip() and not line.startswith('#')]
    return []

setup(
    name='signal-workbench',
    version='1.0.0',
    author='Signal Workbench Team',
    description='Interactive workbench for composing and viewing synthetic time-series signals',
    long_description=read_long_description(),
    long_description_content_type='text/markdown',
    packages=find_namespace_packages(include=['core', 'viz', 'ui']),
    py_modules=[
        'app',
        'config',
    ],
    include_package_data=True,
    data_files=[('assets', ['assets/workbench.css'])],
    install_requires=read_requirements(),
    extras_require={
        'dev': [
            'pytest>=7.0.0',
            'pytest-cov>=3.0.0',
            'black>=22.0.0',
            'flake8>=4.0.0',
            'mypy>=0.950',
        ],
    },
    entry_points={
        'console_scripts': [
            'signal-workbench=app:main',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Science/Research',
        'Intended Audience :: Developers',
        'Topic :: Scientific/Engineering :: Visualization',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Operating System :: OS Independent',
        'Environment :: Web Environment',
    ],
    python_requires='>=3.8',
    keywords='signal visualization plotting drag-and-drop axis-grid',
)
