"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='matchable',
	author='Beth Kjos',
	author_email='kjosib@gmail.com',
	version='0.1.0',
	packages=['matchable'],
	entry_points={
		'console_scripts': ["matchable = matchable.cmdline:main"],
	},
	license='MIT',
	description='Structural matching of parametric container types, with generic derivation',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.12",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Topic :: Software Development :: Libraries",
		"Environment :: Console",
    ],
	python_requires='>=3.12',
	install_requires=[
		"booze-tools>=0.6.2.1",
	],
)
