from setuptools import setup, find_packages

setup(
    name='vibograph',
    version='0.1',
    description='Commit graph layout engine for Git clients',
    author='Iliyas Jorio',
    classifiers=[
        'Topic :: Software Development :: Version Control :: Git',
        'Intended Audience :: Developers',
    ],
    packages=find_packages(include=['vibograph', 'vibograph.*']),
    entry_points={
        'console_scripts': ['vibograph=vibograph.__main__:main']
    },
    python_requires='>= 3.11',
    install_requires=[
        'pygit2 >= 1.15',
        'pyqt6',
    ],
    extras_require={
        'pyqt5': ['pyqt5'],
        'pyside6': ['PySide6 !=6.4.0, !=6.4.0.1, !=6.5.1'],
        'memory-indicator': ['psutil'],
        'test': ['pytest', 'pytest-qt'],
    },
    tests_require=[
        'pytest',
        'pytest-qt',
    ],
)
