# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="minilisp",
    version="0.1.0",
    description="A small Lisp with a desugar pass, closures and checked procedure contracts",
    python_requires=">=3.10",
    packages=find_namespace_packages(include=["minilisp", "minilisp.*", "minilisp_lsp", "minilisp_lsp.*"]),
    package_data={"minilisp": ["prelude/*.lsp"]},
    install_requires=[
        "pygls>=1.0,<2",
        "lsprotocol",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "minilisp=minilisp.repl:main",
            "minilisp-repl-server=minilisp_lsp.repl_server:main",
            "minilisp-ls=minilisp_lsp.server:main",
        ],
    },
    zip_safe=False,
)
