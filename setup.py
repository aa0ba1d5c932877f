from setuptools import find_packages, setup

package_name = 'schema_tag_provider'

setup(
    name=package_name,
    version='0.1.0',
    packages=find_packages(exclude=['test', 'test.*']),
    package_data={
        package_name: ['config/default_params.yaml'],
    },
    include_package_data=True,
    python_requires='>=3.11',
    install_requires=[
        'setuptools',
        'paho-mqtt>=2.0',
        'pyyaml',
        'networkx',
    ],
    zip_safe=True,
    maintainer='hansoo',
    maintainer_email='hansoo@todo.todo',
    description='JSON Schema to UDT definition tag provider over MQTT',
    license='Apache-2.0',
    extras_require={
        'test': [
            'pytest',
        ],
    },
    entry_points={
        'console_scripts': [
            'schema_tag_provider = schema_tag_provider.presentation.main:main',
        ],
    },
)
