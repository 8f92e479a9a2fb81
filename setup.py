from setuptools import find_packages, setup

setup(
    name='MenuBridge',
    version='1.0',
    description="Réconciliation des menus de compte et résolution des URL d'entrées",
    python_requires='>=3.10',
    packages=find_packages(include=['menu_bridge', 'menu_bridge.*'], exclude=['menu_bridge.tests']),
    install_requires=[
        'fastapi',
        'pydantic>=2',
        'uvicorn',
    ],
    extras_require={
        'test': ['pytest', 'httpx'],
    },
    entry_points={
        'console_scripts': ['menu-bridge=menu_bridge.__main__:main'],
    },
    classifiers=[
        'Programming Language :: Python :: 3',
    ],
)
