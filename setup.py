import setuptools

import promptline.version

with open("README.md", "r") as readme:
    long_description = readme.read()

setuptools.setup(
    name='promptline',
    version=promptline.version.VERSION,
    author='Promptline developers',
    description='Compiles compact descriptors into powerline-style zsh prompts',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=setuptools.find_packages('.', include=['promptline', 'promptline.*']),
    scripts=['bin/promptline'],
    install_requires=['prompt_toolkit'],
    extras_require={
        'test': ['dill', 'pytest']
    },
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: GNU General Public License v3 (GPLv3)',
        'Operating System :: POSIX :: Linux'
    ],
    python_requires='>=3.8'
)
