from setuptools import setup


def requirements(path: str):
    with open(path) as f:
        return [*filter(None, map(str.strip, f))]


setup(
    install_requires=requirements('requirements.txt'),
    extras_require={'test': requirements('requirements-test.txt')},
)
