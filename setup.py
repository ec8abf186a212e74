from setuptools import find_packages, setup

package_name = 'ransac_lines'

setup(
    name=package_name,
    version='1.0.0',
    packages=find_packages(exclude=['test']),
    install_requires=['setuptools', 'numpy'],
    extras_require={
        'test': ['pytest'],
    },
    python_requires='>=3.8',
    zip_safe=True,
    maintainer='SAI ESWARA M',
    maintainer_email='saimurali2005@gmail.com',
    description='RANSAC-based multi-line extraction from 2D laser scans',
    license='MIT',
    entry_points={
        'console_scripts': [
            'ransac_lines = ransac_lines.cli:main',
        ],
    },
)
