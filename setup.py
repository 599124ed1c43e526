import setuptools

setuptools.setup(
	name='mint-tools',
	version='0.1.0',
	packages=[
		'minttools',
		'minttools.compiling',
		'minttools.primitives',
		'minttools.runtime',
		'minttools.scanning',
		'minttools.support',
	],
	python_requires='>=3.9',
	description='A MINT-style macro language runtime for hosting editor behavior',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Topic :: Software Development :: Interpreters",
		"Topic :: Text Editors",
		"Development Status :: 3 - Alpha",
	],
)
