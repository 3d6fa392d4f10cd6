from setuptools import setup, find_packages

setup(
    name='mdtimeline',
    version='1.0.0',
    packages=find_packages(include=['mdtimeline', 'mdtimeline.*']),
    include_package_data=True,
    python_requires='>=3.11',
    install_requires=[
        'colored==2.2.3',
        'halo==0.0.31',
        'python-dotenv>=1.0.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.4',
        ],
    },
    entry_points='''
        [console_scripts]
        mdtimeline=mdtimeline.__main__:main
    ''',
    license='MIT',
    keywords='markdown reading time timeline',
    description='Reading-time annotations for Markdown section headers',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
)
